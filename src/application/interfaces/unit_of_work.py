from __future__ import annotations

from typing import Protocol

from src.application.interfaces.repositories.applications import ApplicationRepository
from src.application.interfaces.repositories.memberships import (
    ClassEnrollmentRepository,
    ProjectMemberRepository,
)
from src.application.interfaces.repositories.profiles import ProfileRepository
from src.application.interfaces.repositories.projects import ProjectRepository
from src.application.interfaces.repositories.users import UserRoleRepository


class UnitOfWork(Protocol):
    applications: ApplicationRepository
    profiles: ProfileRepository
    user_roles: UserRoleRepository
    project_members: ProjectMemberRepository
    class_enrollments: ClassEnrollmentRepository
    projects: ProjectRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
