from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.profiles import ProfileRepository
from src.domain.models.profile import Profile
from src.infrastructure.db.orm.profile import ProfileORM


class ProfilesSQLAlchemyRepository(ProfileRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, user_id: UUID) -> Profile | None:
        stmt = select(ProfileORM).where(ProfileORM.id == user_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        if orm is None:
            return None
        return Profile(
            id=orm.id,
            email=orm.email,
            full_name=orm.full_name,
            class_year=orm.class_year,
            github_username=orm.github_username,
        )
