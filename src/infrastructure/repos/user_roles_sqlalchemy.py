from __future__ import annotations

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import InfrastructureError, NotFound
from src.application.interfaces.repositories.users import UserRoleRepository
from src.domain.value_objects.role import Role
from src.infrastructure.db.orm.user_role import UserRoleORM


class UserRolesSQLAlchemyRepository(UserRoleRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_role(self, user_id: UUID) -> Role | None:
        stmt = select(UserRoleORM.role).where(UserRoleORM.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def set_role(self, user_id: UUID, role: Role) -> None:
        stmt = update(UserRoleORM).where(UserRoleORM.user_id == user_id).values(role=role)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise InfrastructureError(f"Failed to update role: {exc}") from exc
        if result.rowcount == 0:
            raise NotFound("User role not found")
