from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.application.use_cases.applications import (
    get_application,
    list_applications,
    process_decision,
    submit_application,
)
from src.domain.value_objects.application_status import ApplicationStatus
from src.infrastructure.services.decision_notifier import ApplicationDecisionNotifier
from src.interfaces.http.deps import get_decision_notifier, get_uow
from src.interfaces.http.schemas.applications import (
    ApplicationCreate,
    ApplicationDecisionRequest,
    ApplicationDecisionResponse,
    ApplicationResponse,
)

router = APIRouter(prefix="/applications", tags=["applications"])


@router.post("/", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def create_application(payload: ApplicationCreate, uow=Depends(get_uow)):
    created = await submit_application.execute(
        uow, submit_application.SubmitApplicationInput(**payload.model_dump())
    )
    return ApplicationResponse.model_validate(created)


@router.get("/", response_model=list[ApplicationResponse])
async def list_applications_endpoint(
    user_id: UUID | None = None,
    status: ApplicationStatus | None = None,
    uow=Depends(get_uow),
):
    items = await list_applications.execute(uow, user_id=user_id, status=status)
    return [ApplicationResponse.model_validate(item) for item in items]


@router.post("/process-update", response_model=ApplicationDecisionResponse)
async def process_application_update(
    payload: ApplicationDecisionRequest,
    uow=Depends(get_uow),
    notifier: ApplicationDecisionNotifier = Depends(get_decision_notifier),
) -> ApplicationDecisionResponse:
    result = await process_decision.execute(
        uow,
        process_decision.ProcessDecisionInput(
            application_id=payload.application_id,
            status=ApplicationStatus(payload.status),
            reviewer_id=payload.reviewer_id,
        ),
        notifier=notifier,
    )
    return ApplicationDecisionResponse(
        success=result.success,
        message=result.message,
        upgraded_role=result.upgraded_role,
    )


@router.get("/{application_id}", response_model=ApplicationResponse)
async def read_application(application_id: UUID, uow=Depends(get_uow)):
    application = await get_application.execute(uow, application_id)
    return ApplicationResponse.model_validate(application)
