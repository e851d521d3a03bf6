from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError, InfrastructureError, NotFound
from src.application.interfaces.repositories.applications import ApplicationRepository
from src.domain.models.application import Application
from src.domain.value_objects.application_status import ApplicationStatus
from src.infrastructure.db.orm.application import ApplicationORM

_COPIED_FIELDS = (
    "id",
    "user_id",
    "application_type",
    "status",
    "full_name",
    "class_year",
    "project_id",
    "class_id",
    "board_position",
    "project_role",
    "class_role",
    "why_join",
    "why_position",
    "relevant_experience",
    "other_commitments",
    "project_detail",
    "problem_solved",
    "previous_experience",
    "resume_url",
    "transcript_url",
    "reviewed_by",
    "reviewed_at",
    "created_at",
    "updated_at",
)


class ApplicationsSQLAlchemyRepository(ApplicationRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: ApplicationORM) -> Application:
        return Application(**{name: getattr(orm, name) for name in _COPIED_FIELDS})

    async def add(self, application: Application) -> Application:
        orm = ApplicationORM(**{name: getattr(application, name) for name in _COPIED_FIELDS})
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, application_id: UUID) -> Application | None:
        stmt = select(ApplicationORM).where(ApplicationORM.id == application_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(
        self,
        *,
        user_id: UUID | None = None,
        status: ApplicationStatus | None = None,
    ) -> list[Application]:
        stmt = select(ApplicationORM)
        if user_id is not None:
            stmt = stmt.where(ApplicationORM.user_id == user_id)
        if status is not None:
            stmt = stmt.where(ApplicationORM.status == status)
        stmt = stmt.order_by(ApplicationORM.created_at.desc())
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]

    async def find_pending_for_target(
        self, user_id: UUID, application: Application
    ) -> Application | None:
        stmt = (
            select(ApplicationORM)
            .where(ApplicationORM.user_id == user_id)
            .where(ApplicationORM.status == ApplicationStatus.PENDING)
            .where(ApplicationORM.application_type == application.application_type)
        )
        if application.project_id is not None:
            stmt = stmt.where(ApplicationORM.project_id == application.project_id)
        if application.class_id is not None:
            stmt = stmt.where(ApplicationORM.class_id == application.class_id)
        if application.board_position is not None:
            stmt = stmt.where(ApplicationORM.board_position == application.board_position)
        result = await self.session.execute(stmt.limit(1))
        orm = result.scalars().first()
        return self._to_domain(orm) if orm else None

    async def update_review(
        self,
        application_id: UUID,
        *,
        status: ApplicationStatus,
        reviewed_by: UUID | None,
        reviewed_at: datetime | None,
        expected_status: ApplicationStatus | None = None,
    ) -> None:
        """Write the review fields; with ``expected_status`` only if the row still has it."""
        stmt = (
            update(ApplicationORM)
            .where(ApplicationORM.id == application_id)
            .values(status=status, reviewed_by=reviewed_by, reviewed_at=reviewed_at)
        )
        if expected_status is not None:
            stmt = stmt.where(ApplicationORM.status == expected_status)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise InfrastructureError(f"Failed to update application status: {exc}") from exc
        if result.rowcount == 0:
            if expected_status is not None:
                raise ConflictError(
                    "Application was decided concurrently",
                    details={"application_id": str(application_id)},
                )
            raise NotFound("Application not found")
