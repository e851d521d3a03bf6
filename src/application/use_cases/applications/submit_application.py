from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from src.application.errors import ConflictError, NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.application import Application
from src.domain.value_objects.application_type import ApplicationType
from src.domain.value_objects.member_roles import ClassRole, ProjectRole


@dataclass(slots=True)
class SubmitApplicationInput:
    user_id: UUID
    application_type: ApplicationType
    full_name: str
    class_year: str
    project_id: UUID | None = None
    class_id: UUID | None = None
    board_position: str | None = None
    project_role: ProjectRole | None = None
    class_role: ClassRole | None = None
    why_join: str | None = None
    why_position: str | None = None
    relevant_experience: str | None = None
    other_commitments: str | None = None
    project_detail: str | None = None
    problem_solved: str | None = None
    previous_experience: str | None = None
    resume_url: str | None = None
    transcript_url: str | None = None


def validate_target(payload: SubmitApplicationInput) -> None:
    if payload.application_type is ApplicationType.PROJECT and payload.project_id is None:
        raise ValidationError("Project applications require project_id")
    if payload.application_type is ApplicationType.CLASS and payload.class_id is None:
        raise ValidationError("Class applications require class_id")
    if payload.application_type is ApplicationType.BOARD and not payload.board_position:
        raise ValidationError("Board applications require board_position")


async def execute(uow: UnitOfWork, payload: SubmitApplicationInput) -> Application:
    validate_target(payload)
    profile = await uow.profiles.get(payload.user_id)
    if profile is None:
        raise NotFound("Profile not found")

    application = Application.create(
        user_id=payload.user_id,
        application_type=payload.application_type,
        full_name=payload.full_name.strip() or profile.display_name(),
        class_year=payload.class_year,
        project_id=payload.project_id,
        class_id=payload.class_id,
        board_position=payload.board_position,
        project_role=payload.project_role,
        class_role=payload.class_role,
        why_join=payload.why_join or None,
        why_position=payload.why_position or None,
        relevant_experience=payload.relevant_experience or None,
        other_commitments=payload.other_commitments or None,
        project_detail=payload.project_detail or None,
        problem_solved=payload.problem_solved or None,
        previous_experience=payload.previous_experience or None,
        resume_url=payload.resume_url,
        transcript_url=payload.transcript_url,
    )
    duplicate = await uow.applications.find_pending_for_target(payload.user_id, application)
    if duplicate is not None:
        raise ConflictError(
            "A pending application for this target already exists",
            details={"application_id": str(duplicate.id)},
        )
    created = await uow.applications.add(application)
    await uow.commit()
    return created
