from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from src.domain.value_objects.application_status import ApplicationStatus
from src.domain.value_objects.application_type import ApplicationType
from src.domain.value_objects.member_roles import ClassRole, ProjectRole


@dataclass(slots=True, frozen=True)
class ReviewSnapshot:
    """Review fields captured before a decision so they can be restored verbatim."""

    status: ApplicationStatus
    reviewed_by: UUID | None
    reviewed_at: datetime | None


@dataclass(slots=True)
class Application:
    id: UUID
    user_id: UUID
    application_type: ApplicationType
    full_name: str
    class_year: str
    status: ApplicationStatus = ApplicationStatus.PENDING

    # Targets
    project_id: UUID | None = None
    class_id: UUID | None = None
    board_position: str | None = None
    project_role: ProjectRole | None = None
    class_role: ClassRole | None = None

    # Answers
    why_join: str | None = None
    why_position: str | None = None
    relevant_experience: str | None = None
    other_commitments: str | None = None
    project_detail: str | None = None
    problem_solved: str | None = None
    previous_experience: str | None = None
    resume_url: str | None = None
    transcript_url: str | None = None

    reviewed_by: UUID | None = None
    reviewed_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        user_id: UUID,
        application_type: ApplicationType,
        full_name: str,
        class_year: str,
        **fields,
    ) -> Application:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            user_id=user_id,
            application_type=application_type,
            full_name=full_name,
            class_year=class_year,
            status=ApplicationStatus.PENDING,
            created_at=now,
            updated_at=now,
            **fields,
        )

    def snapshot(self) -> ReviewSnapshot:
        return ReviewSnapshot(
            status=self.status,
            reviewed_by=self.reviewed_by,
            reviewed_at=self.reviewed_at,
        )

    @property
    def target_id(self) -> UUID | None:
        if self.application_type is ApplicationType.PROJECT:
            return self.project_id
        if self.application_type is ApplicationType.CLASS:
            return self.class_id
        return None
