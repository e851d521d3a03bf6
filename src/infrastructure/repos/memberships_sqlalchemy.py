from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError, InfrastructureError
from src.application.interfaces.repositories.memberships import (
    ClassEnrollmentRepository,
    ProjectMemberRepository,
)
from src.domain.models.membership import ClassEnrollment, ProjectMember
from src.domain.models.project import ProvisioningMember
from src.domain.value_objects.member_roles import ProjectRole
from src.infrastructure.db.orm.membership import ClassEnrollmentORM, ProjectMemberORM
from src.infrastructure.db.orm.profile import ProfileORM


class ProjectMembersSQLAlchemyRepository(ProjectMemberRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def exists(self, project_id: UUID, user_id: UUID) -> bool:
        stmt = (
            select(ProjectMemberORM.id)
            .where(ProjectMemberORM.project_id == project_id)
            .where(ProjectMemberORM.user_id == user_id)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def add(self, member: ProjectMember) -> None:
        self.session.add(
            ProjectMemberORM(project_id=member.project_id, user_id=member.user_id, role=member.role)
        )
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("User is already a member of this project") from exc
        except SQLAlchemyError as exc:
            raise InfrastructureError(f"Failed to add to project: {exc}") from exc

    async def remove(self, project_id: UUID, user_id: UUID) -> None:
        stmt = delete(ProjectMemberORM).where(
            ProjectMemberORM.project_id == project_id, ProjectMemberORM.user_id == user_id
        )
        await self.session.execute(stmt)

    async def list_with_github(self, project_id: UUID) -> list[ProvisioningMember]:
        stmt = (
            select(ProjectMemberORM.user_id, ProjectMemberORM.role, ProfileORM.github_username)
            .join(ProfileORM, ProfileORM.id == ProjectMemberORM.user_id)
            .where(ProjectMemberORM.project_id == project_id)
            .where(ProfileORM.github_username.is_not(None))
            .order_by(ProjectMemberORM.created_at)
        )
        result = await self.session.execute(stmt)
        return [
            ProvisioningMember(
                user_id=user_id,
                github_username=username,
                is_lead=role == ProjectRole.LEAD,
            )
            for user_id, role, username in result.all()
        ]


class ClassEnrollmentsSQLAlchemyRepository(ClassEnrollmentRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def exists(self, class_id: UUID, user_id: UUID) -> bool:
        stmt = (
            select(ClassEnrollmentORM.id)
            .where(ClassEnrollmentORM.class_id == class_id)
            .where(ClassEnrollmentORM.user_id == user_id)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def add(self, enrollment: ClassEnrollment) -> None:
        self.session.add(
            ClassEnrollmentORM(
                class_id=enrollment.class_id, user_id=enrollment.user_id, role=enrollment.role
            )
        )
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("User is already enrolled in this class") from exc
        except SQLAlchemyError as exc:
            raise InfrastructureError(f"Failed to enroll in class: {exc}") from exc

    async def remove(self, class_id: UUID, user_id: UUID) -> None:
        stmt = delete(ClassEnrollmentORM).where(
            ClassEnrollmentORM.class_id == class_id, ClassEnrollmentORM.user_id == user_id
        )
        await self.session.execute(stmt)
