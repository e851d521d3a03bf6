from __future__ import annotations

import logging

from src.application.use_cases.projects import provision_projects
from src.config.settings import Settings, get_settings
from src.infrastructure.db.session import SQLAlchemyUnitOfWork
from src.infrastructure.github.client import GitHubOrgClient

logger = logging.getLogger(__name__)


def build_github_client(settings: Settings) -> GitHubOrgClient | None:
    if settings.github_org_pat is None:
        return None
    return GitHubOrgClient(
        token=settings.github_org_pat.get_secret_value(),
        org=settings.github_org,
        api_url=settings.github_api_url,
    )


async def run_project_provisioning(
    session_factory,
    *,
    settings: Settings | None = None,
    github: GitHubOrgClient | None = None,
) -> provision_projects.ProvisioningReport | None:
    """Reconcile GitHub teams/repositories for started projects. Safe to call from cron."""
    settings = settings or get_settings()
    github = github or build_github_client(settings)
    if github is None:
        logger.warning("GITHUB_ORG_PAT not configured; skipping project provisioning")
        return None
    try:
        uow = SQLAlchemyUnitOfWork(session_factory)
        async with uow:
            report = await provision_projects.execute(uow, github)
    except Exception as exc:
        logger.error("run_project_provisioning failed: %s", exc, exc_info=True)
        return None
    failed = [r for r in report.results if not r.success]
    logger.info("Project provisioning: %d processed, %d failed", report.processed, len(failed))
    return report
