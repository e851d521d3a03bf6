from __future__ import annotations

from fastapi import APIRouter, Depends

from src.application.errors import InfrastructureError
from src.application.use_cases.projects import provision_projects
from src.infrastructure.github.client import GitHubOrgClient
from src.interfaces.http.deps import get_github_client, get_uow
from src.interfaces.http.schemas.projects import (
    ProjectProvisioningResultSchema,
    ProvisioningResponse,
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("/provision", response_model=ProvisioningResponse)
async def provision(
    uow=Depends(get_uow),
    github: GitHubOrgClient | None = Depends(get_github_client),
) -> ProvisioningResponse:
    if github is None:
        raise InfrastructureError("GitHub organization token not configured")
    report = await provision_projects.execute(uow, github)
    return ProvisioningResponse(
        message=report.message,
        processed=report.processed,
        results=[ProjectProvisioningResultSchema(**r.as_dict()) for r in report.results],
    )
