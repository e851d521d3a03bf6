from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID

from src.application.errors import (
    AppError,
    ConflictError,
    DecisionFailed,
    NotFound,
    ValidationError,
)
from src.application.interfaces.notifier import DecisionNotifier
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.locks import KeyedLocks, decision_locks
from src.application.saga import Saga
from src.domain.models.application import Application, ReviewSnapshot
from src.domain.models.membership import ClassEnrollment, ProjectMember
from src.domain.value_objects.application_status import ApplicationStatus
from src.domain.value_objects.application_type import ApplicationType
from src.domain.value_objects.member_roles import ClassRole, ProjectRole
from src.domain.value_objects.role import Role

logger = logging.getLogger(__name__)

STEP_UPDATE_APPLICATION = "update_application"
STEP_UPGRADE_ROLE = "upgrade_role"
STEP_ADD_PROJECT_MEMBER = "add_project_member"
STEP_ENROLL_CLASS = "enroll_class"


@dataclass(slots=True)
class ProcessDecisionInput:
    application_id: UUID
    status: ApplicationStatus
    reviewer_id: UUID


@dataclass(slots=True, frozen=True)
class DecisionOutcome:
    application_updated: bool = False
    role_upgraded: bool = False
    project_member_added: bool = False
    class_enrolled: bool = False


@dataclass(slots=True)
class ProcessDecisionOutput:
    success: bool
    message: str
    upgraded_role: bool
    outcome: DecisionOutcome


def _build_saga(
    uow: UnitOfWork,
    application: Application,
    snapshot: ReviewSnapshot,
    original_role: Role | None,
    status: ApplicationStatus,
    reviewer_id: UUID,
    reviewed_at: datetime,
) -> Saga:
    saga = Saga(checkpoint=uow.commit, on_failure=uow.rollback)
    accepted = status is ApplicationStatus.ACCEPTED
    user_id = application.user_id

    async def update_application() -> bool:
        await uow.applications.update_review(
            application.id,
            status=status,
            reviewed_by=reviewer_id,
            reviewed_at=reviewed_at,
            expected_status=snapshot.status,
        )
        return True

    async def restore_application() -> None:
        await uow.applications.update_review(
            application.id,
            status=snapshot.status,
            reviewed_by=snapshot.reviewed_by,
            reviewed_at=snapshot.reviewed_at,
        )

    saga.add_step(STEP_UPDATE_APPLICATION, update_application, restore_application)

    if (
        accepted
        and application.application_type.places_into_target()
        and original_role is not None
        and original_role.is_upgradable_on_acceptance()
    ):

        async def upgrade_role() -> bool:
            await uow.user_roles.set_role(user_id, Role.MEMBER)
            return True

        async def restore_role() -> None:
            await uow.user_roles.set_role(user_id, original_role)

        saga.add_step(STEP_UPGRADE_ROLE, upgrade_role, restore_role)

    if (
        accepted
        and application.application_type is ApplicationType.PROJECT
        and application.project_id is not None
    ):
        project_id = application.project_id

        async def add_project_member() -> bool:
            if await uow.project_members.exists(project_id, user_id):
                return False
            await uow.project_members.add(
                ProjectMember(
                    project_id=project_id,
                    user_id=user_id,
                    role=application.project_role or ProjectRole.MEMBER,
                )
            )
            return True

        async def remove_project_member() -> None:
            await uow.project_members.remove(project_id, user_id)

        saga.add_step(STEP_ADD_PROJECT_MEMBER, add_project_member, remove_project_member)

    if (
        accepted
        and application.application_type is ApplicationType.CLASS
        and application.class_id is not None
    ):
        class_id = application.class_id

        async def enroll_class() -> bool:
            if await uow.class_enrollments.exists(class_id, user_id):
                return False
            await uow.class_enrollments.add(
                ClassEnrollment(
                    class_id=class_id,
                    user_id=user_id,
                    role=application.class_role or ClassRole.STUDENT,
                )
            )
            return True

        async def remove_enrollment() -> None:
            await uow.class_enrollments.remove(class_id, user_id)

        saga.add_step(STEP_ENROLL_CLASS, enroll_class, remove_enrollment)

    return saga


async def execute(
    uow: UnitOfWork,
    payload: ProcessDecisionInput,
    *,
    notifier: DecisionNotifier | None = None,
    locks: KeyedLocks | None = None,
    now: datetime | None = None,
) -> ProcessDecisionOutput:
    try:
        status = ApplicationStatus(payload.status)
    except ValueError as exc:
        raise ValidationError(f"Unknown decision: {payload.status}") from exc
    if not status.is_decision():
        raise ValidationError("Decision must be 'accepted' or 'rejected'")

    registry = locks if locks is not None else decision_locks
    async with registry.hold(payload.application_id):
        application = await uow.applications.get(payload.application_id)
        if application is None:
            raise NotFound(f"Application not found: {payload.application_id}")
        profile = await uow.profiles.get(application.user_id)
        if profile is None:
            raise NotFound(f"Profile not found for user {application.user_id}")

        if application.status.is_decision() and application.status is not status:
            raise ConflictError(
                f"Application already {application.status.value}",
                details={"application_id": str(application.id)},
            )

        snapshot = application.snapshot()
        original_role = await uow.user_roles.get_role(application.user_id)
        saga = _build_saga(
            uow,
            application,
            snapshot,
            original_role,
            status,
            payload.reviewer_id,
            now or datetime.now(timezone.utc),
        )
        try:
            result = await saga.run()
        except AppError:
            raise
        except Exception as exc:
            raise DecisionFailed(f"Failed to process application decision: {exc}") from exc

    outcome = DecisionOutcome(
        application_updated=result.did(STEP_UPDATE_APPLICATION),
        role_upgraded=result.did(STEP_UPGRADE_ROLE),
        project_member_added=result.did(STEP_ADD_PROJECT_MEMBER),
        class_enrolled=result.did(STEP_ENROLL_CLASS),
    )
    logger.info(
        "Application %s %s by %s (role_upgraded=%s project_member=%s class_enrolled=%s)",
        application.id,
        status.value,
        payload.reviewer_id,
        outcome.role_upgraded,
        outcome.project_member_added,
        outcome.class_enrolled,
    )

    if notifier is not None:
        try:
            await notifier.notify(application, profile, status)
        except Exception as exc:
            logger.warning("Decision notifications failed for %s: %s", application.id, exc)

    return ProcessDecisionOutput(
        success=True,
        message="Application decision processed successfully",
        upgraded_role=outcome.role_upgraded,
        outcome=outcome,
    )
