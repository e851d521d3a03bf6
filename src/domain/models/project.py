from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(slots=True)
class Project:
    id: UUID
    name: str
    semester_code: str
    status: str = "pending"
    start_date: date | None = None
    repository_url: str | None = None


@dataclass(slots=True, frozen=True)
class ProvisioningMember:
    """Accepted project member with a linked GitHub account."""

    user_id: UUID
    github_username: str
    is_lead: bool = False
