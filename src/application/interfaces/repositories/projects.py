from __future__ import annotations

from datetime import date
from typing import Protocol
from uuid import UUID

from src.domain.models.project import Project


class ProjectRepository(Protocol):
    async def list_ready_for_provisioning(self, today: date) -> list[Project]: ...

    async def set_repository_url(self, project_id: UUID, repository_url: str) -> None: ...
