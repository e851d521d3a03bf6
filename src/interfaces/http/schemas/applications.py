from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.value_objects.application_status import ApplicationStatus
from src.domain.value_objects.application_type import ApplicationType
from src.domain.value_objects.member_roles import ClassRole, ProjectRole


class ApplicationCreate(BaseModel):
    user_id: UUID
    application_type: ApplicationType
    full_name: str = Field(min_length=1)
    class_year: str = Field(min_length=1)
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


class ApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    application_type: ApplicationType
    status: ApplicationStatus
    full_name: str
    class_year: str
    project_id: UUID | None
    class_id: UUID | None
    board_position: str | None
    project_role: ProjectRole | None
    class_role: ClassRole | None
    why_join: str | None
    why_position: str | None
    relevant_experience: str | None
    other_commitments: str | None
    project_detail: str | None
    problem_solved: str | None
    previous_experience: str | None
    resume_url: str | None
    transcript_url: str | None
    reviewed_by: UUID | None
    reviewed_at: datetime | None
    created_at: datetime
    updated_at: datetime


class ApplicationDecisionRequest(BaseModel):
    application_id: UUID
    status: Literal["accepted", "rejected"]
    reviewer_id: UUID


class ApplicationDecisionResponse(BaseModel):
    success: bool
    message: str
    upgraded_role: bool
