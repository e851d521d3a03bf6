from __future__ import annotations

from pydantic import BaseModel


class ProjectProvisioningResultSchema(BaseModel):
    project: str
    success: bool
    team: str | None = None
    repo: str | None = None
    created: bool | None = None
    error: str | None = None


class ProvisioningResponse(BaseModel):
    message: str
    processed: int
    results: list[ProjectProvisioningResultSchema]
