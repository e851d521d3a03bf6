from __future__ import annotations

from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.application import Application
from src.domain.value_objects.application_status import ApplicationStatus


async def execute(
    uow: UnitOfWork,
    *,
    user_id: UUID | None = None,
    status: ApplicationStatus | None = None,
) -> list[Application]:
    return await uow.applications.list(user_id=user_id, status=status)
