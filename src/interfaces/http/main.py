from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.config.settings import Settings, get_settings
from src.infrastructure.chat.models import ChatInviter, LoggingChatInviter
from src.infrastructure.chat.slack import SlackInviteClient
from src.infrastructure.db.session import create_engine, create_session_factory
from src.infrastructure.email.models import EmailService
from src.infrastructure.email.providers.logging_provider import LoggingEmailService
from src.infrastructure.email.providers.resend_provider import ResendEmailService
from src.infrastructure.email.renderer.engine import EmailTemplateRenderer
from src.infrastructure.github.client import GitHubOrgClient
from src.infrastructure.scheduler.provisioning_tasks import build_github_client
from src.infrastructure.services.decision_notifier import ApplicationDecisionNotifier
from src.interfaces.http.deps import get_app_settings
from src.interfaces.http.routers import applications as applications_router
from src.interfaces.http.routers import projects as projects_router
from src.interfaces.middleware.error_handler import register_error_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        yield
    finally:
        engine = getattr(app.state, "engine", None)
        if engine is not None:
            await engine.dispose()


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    root = logging.getLogger()
    # Avoid adding duplicate handlers on reload
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    # Align common libraries
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine", "httpx"):
        logging.getLogger(name).setLevel(level)


def _build_email_service(settings: Settings) -> EmailService:
    provider = settings.email_provider.lower()
    if provider == "resend":
        if settings.resend_api_key is None:
            logger.warning("EMAIL_PROVIDER=resend but RESEND_API_KEY is missing; logging emails")
            return LoggingEmailService()
        return ResendEmailService(
            api_key=settings.resend_api_key.get_secret_value(),
            api_url=settings.resend_api_url,
        )
    return LoggingEmailService()


def _build_chat_inviter(settings: Settings) -> ChatInviter:
    if not settings.chat_invites_enabled:
        return LoggingChatInviter()
    return SlackInviteClient(
        bot_token=settings.slack_bot_token.get_secret_value(),
        team_id=settings.slack_team_id,
        api_url=settings.slack_api_url,
    )


def create_app(
    *,
    settings: Settings | None = None,
    email_service: EmailService | None = None,
    chat_inviter: ChatInviter | None = None,
    github_client: GitHubOrgClient | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings.log_level)
    app = FastAPI(
        title="Club Applications Backend",
        version="0.1.0",
        description="Application review, decision processing and project provisioning",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = create_engine(settings.database_url)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.email_service = email_service or _build_email_service(settings)
    app.state.email_renderer = EmailTemplateRenderer.create_default()
    app.state.chat_inviter = chat_inviter or _build_chat_inviter(settings)
    app.state.decision_notifier = ApplicationDecisionNotifier(
        settings=settings,
        email_service=app.state.email_service,
        renderer=app.state.email_renderer,
        chat_inviter=app.state.chat_inviter,
    )
    app.state.github_client = github_client or build_github_client(settings)
    register_error_handlers(app)

    # Group all API routes behind a single versioned prefix
    api = APIRouter(prefix="/api/v1")
    api.include_router(applications_router.router)
    api.include_router(projects_router.router)

    @api.get("/health", tags=["health"])
    async def health(_: Settings = Depends(get_app_settings)) -> dict[str, str]:  # noqa: ANN001
        return {"status": "ok"}

    app.include_router(api)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()
