from __future__ import annotations

from datetime import date
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.projects import ProjectRepository
from src.domain.models.project import Project
from src.infrastructure.db.orm.project import ProjectORM


class ProjectsSQLAlchemyRepository(ProjectRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_ready_for_provisioning(self, today: date) -> list[Project]:
        stmt = (
            select(ProjectORM)
            .where(ProjectORM.status == "accepted")
            .where(ProjectORM.start_date <= today)
            .where(ProjectORM.repository_url.is_(None))
            .order_by(ProjectORM.start_date)
        )
        result = await self.session.execute(stmt)
        return [
            Project(
                id=row.id,
                name=row.name,
                semester_code=row.semester_code,
                status=row.status,
                start_date=row.start_date,
                repository_url=row.repository_url,
            )
            for row in result.scalars().all()
        ]

    async def set_repository_url(self, project_id: UUID, repository_url: str) -> None:
        stmt = (
            update(ProjectORM)
            .where(ProjectORM.id == project_id)
            .values(repository_url=repository_url)
        )
        await self.session.execute(stmt)
