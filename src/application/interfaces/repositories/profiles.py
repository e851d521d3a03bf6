from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.profile import Profile


class ProfileRepository(Protocol):
    async def get(self, user_id: UUID) -> Profile | None: ...
