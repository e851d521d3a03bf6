from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.membership import ClassEnrollment, ProjectMember
from src.domain.models.project import ProvisioningMember


class ProjectMemberRepository(Protocol):
    async def exists(self, project_id: UUID, user_id: UUID) -> bool: ...

    async def add(self, member: ProjectMember) -> None: ...

    async def remove(self, project_id: UUID, user_id: UUID) -> None: ...

    async def list_with_github(self, project_id: UUID) -> list[ProvisioningMember]: ...


class ClassEnrollmentRepository(Protocol):
    async def exists(self, class_id: UUID, user_id: UUID) -> bool: ...

    async def add(self, enrollment: ClassEnrollment) -> None: ...

    async def remove(self, class_id: UUID, user_id: UUID) -> None: ...
