from __future__ import annotations

from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.application import Application


async def execute(uow: UnitOfWork, application_id: UUID) -> Application:
    application = await uow.applications.get(application_id)
    if application is None:
        raise NotFound("Application not found")
    return application
