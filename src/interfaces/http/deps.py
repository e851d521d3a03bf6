from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Request

from src.config.settings import Settings, get_settings
from src.infrastructure.db.session import SQLAlchemyUnitOfWork
from src.infrastructure.github.client import GitHubOrgClient
from src.infrastructure.services.decision_notifier import ApplicationDecisionNotifier


async def get_uow(request: Request) -> AsyncIterator[SQLAlchemyUnitOfWork]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_decision_notifier(request: Request) -> ApplicationDecisionNotifier:
    notifier = getattr(request.app.state, "decision_notifier", None)
    if notifier is None:
        raise RuntimeError("Decision notifier not configured")
    return notifier


def get_github_client(request: Request) -> GitHubOrgClient | None:
    return getattr(request.app.state, "github_client", None)
