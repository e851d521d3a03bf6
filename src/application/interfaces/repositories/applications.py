from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.models.application import Application
from src.domain.value_objects.application_status import ApplicationStatus


class ApplicationRepository(Protocol):
    async def add(self, application: Application) -> Application: ...

    async def get(self, application_id: UUID) -> Application | None: ...

    async def list(
        self,
        *,
        user_id: UUID | None = None,
        status: ApplicationStatus | None = None,
    ) -> list[Application]: ...

    async def find_pending_for_target(
        self, user_id: UUID, application: Application
    ) -> Application | None: ...

    async def update_review(
        self,
        application_id: UUID,
        *,
        status: ApplicationStatus,
        reviewed_by: UUID | None,
        reviewed_at: datetime | None,
        expected_status: ApplicationStatus | None = None,
    ) -> None: ...
