from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.application.interfaces.unit_of_work import UnitOfWork


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    """
    Session-scoped unit of work.

    ``commit`` makes everything flushed so far durable. The decision saga
    commits after every step, so each step is its own transaction and
    ``rollback`` only discards the step in flight.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self._reset_repositories()

    def _reset_repositories(self) -> None:
        self.applications = None
        self.profiles = None
        self.user_roles = None
        self.project_members = None
        self.class_enrollments = None
        self.projects = None

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        from src.infrastructure.repos.applications_sqlalchemy import (
            ApplicationsSQLAlchemyRepository,
        )
        from src.infrastructure.repos.memberships_sqlalchemy import (
            ClassEnrollmentsSQLAlchemyRepository,
            ProjectMembersSQLAlchemyRepository,
        )
        from src.infrastructure.repos.profiles_sqlalchemy import ProfilesSQLAlchemyRepository
        from src.infrastructure.repos.projects_sqlalchemy import ProjectsSQLAlchemyRepository
        from src.infrastructure.repos.user_roles_sqlalchemy import UserRolesSQLAlchemyRepository

        self.applications = ApplicationsSQLAlchemyRepository(self.session)
        self.profiles = ProfilesSQLAlchemyRepository(self.session)
        self.user_roles = UserRolesSQLAlchemyRepository(self.session)
        self.project_members = ProjectMembersSQLAlchemyRepository(self.session)
        self.class_enrollments = ClassEnrollmentsSQLAlchemyRepository(self.session)
        self.projects = ProjectsSQLAlchemyRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self._reset_repositories()

    async def commit(self) -> None:
        if not self.session:
            return
        await self.session.commit()

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()
