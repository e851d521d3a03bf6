from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator
from datetime import date
from pathlib import Path
from typing import cast
from uuid import UUID, uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from src.config.settings import Settings
from src.domain.value_objects.role import Role
from src.infrastructure.chat.models import LoggingChatInviter
from src.infrastructure.db.base import Base
from src.infrastructure.db.orm import application, membership, project  # noqa: F401
from src.infrastructure.db.orm.profile import ProfileORM
from src.infrastructure.db.orm.project import ProjectORM
from src.infrastructure.db.orm.user_role import UserRoleORM
from src.infrastructure.email.providers.logging_provider import LoggingEmailService
from src.interfaces.http.main import create_app


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "log_level": "INFO",
            "environment": "test",
            "email_provider": "logging",
        }
    )


@pytest.fixture()
def email_service() -> LoggingEmailService:
    return LoggingEmailService()


@pytest.fixture()
def chat_inviter() -> LoggingChatInviter:
    return LoggingChatInviter()


@pytest.fixture()
def app(test_settings: Settings, email_service, chat_inviter):
    return create_app(
        settings=test_settings, email_service=email_service, chat_inviter=chat_inviter
    )


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        engine = app.state.engine
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        yield client
    await app.state.engine.dispose()


async def _seed_user(app, *, role: Role, email: str, full_name: str, github: str | None = None):
    user_id = uuid4()
    async with app.state.session_factory() as session:  # type: ignore[attr-defined]
        async_session = cast(AsyncSession, session)
        async_session.add_all(
            [
                ProfileORM(
                    id=user_id,
                    email=email,
                    full_name=full_name,
                    class_year="2027",
                    github_username=github,
                ),
                UserRoleORM(user_id=user_id, role=role),
            ]
        )
        await async_session.commit()
    return user_id


@pytest.fixture()
async def seeded_users(app, client) -> dict[str, UUID]:
    prospect_id = await _seed_user(
        app, role=Role.PROSPECT, email="sparty@msu.edu", full_name="Sparty Green", github="sparty"
    )
    board_id = await _seed_user(
        app, role=Role.BOARD, email="board@msu.edu", full_name="Board Reviewer"
    )
    return {"prospect": prospect_id, "board": board_id}


@pytest.fixture()
async def seeded_project(app, client) -> UUID:
    project_id = uuid4()
    async with app.state.session_factory() as session:  # type: ignore[attr-defined]
        session.add(
            ProjectORM(
                id=project_id,
                name="Campus Navigator",
                semester_code="F26",
                status="accepted",
                start_date=date(2024, 9, 1),
            )
        )
        await session.commit()
    return project_id
