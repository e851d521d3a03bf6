from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from src.domain.value_objects.member_roles import ClassRole, ProjectRole


@dataclass(slots=True, frozen=True)
class ProjectMember:
    project_id: UUID
    user_id: UUID
    role: ProjectRole = ProjectRole.MEMBER

    @property
    def is_lead(self) -> bool:
        return self.role is ProjectRole.LEAD


@dataclass(slots=True, frozen=True)
class ClassEnrollment:
    class_id: UUID
    user_id: UUID
    role: ClassRole = ClassRole.STUDENT
