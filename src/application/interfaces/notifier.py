from __future__ import annotations

from typing import Protocol

from src.domain.models.application import Application
from src.domain.models.profile import Profile
from src.domain.value_objects.application_status import ApplicationStatus


class DecisionNotifier(Protocol):
    """Best-effort delivery of decision side effects; must never raise."""

    async def notify(
        self,
        application: Application,
        profile: Profile,
        status: ApplicationStatus,
    ) -> object: ...
