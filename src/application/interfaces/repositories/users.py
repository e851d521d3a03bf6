from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.value_objects.role import Role


class UserRoleRepository(Protocol):
    async def get_role(self, user_id: UUID) -> Role | None: ...

    async def set_role(self, user_id: UUID, role: Role) -> None: ...
