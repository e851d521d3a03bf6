from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any

from src.application.interfaces.github import GitHubOrganization
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.project import Project

logger = logging.getLogger(__name__)

_SLUG_INVALID = re.compile(r"[^a-z0-9-]")
_WHITESPACE = re.compile(r"\s+")


@dataclass(slots=True)
class ProjectProvisioningResult:
    project: str
    success: bool
    team: str | None = None
    repo: str | None = None
    created: bool = False
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"project": self.project, "success": self.success}
        if self.success:
            data.update({"team": self.team, "repo": self.repo, "created": self.created})
        else:
            data["error"] = self.error
        return data


@dataclass(slots=True)
class ProvisioningReport:
    results: list[ProjectProvisioningResult] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.results)

    @property
    def message(self) -> str:
        return "Processed projects" if self.results else "No projects ready for automation"


class ProvisioningSkipped(Exception):
    """Project cannot be provisioned yet; recorded as a failed result without a traceback."""


def team_slug(project: Project) -> str:
    return _SLUG_INVALID.sub("-", f"{project.name}-{project.semester_code}".lower())


def repository_name(project: Project) -> str:
    return f"{_WHITESPACE.sub('-', project.name.lower())}-{project.semester_code.lower()}"


async def _provision_one(
    uow: UnitOfWork, github: GitHubOrganization, project: Project
) -> ProjectProvisioningResult:
    slug = team_slug(project)
    team = await github.get_team(slug)
    team_existed = team is not None

    members = await uow.project_members.list_with_github(project.id)
    if not members:
        raise ProvisioningSkipped("No members with GitHub usernames")
    lead = next((m for m in members if m.is_lead), None)
    if lead is None:
        raise ProvisioningSkipped("No team lead with GitHub username")

    if team is None:
        team = await github.create_team(
            f"{project.name} ({project.semester_code})",
            f"Project team for {project.name} - {project.semester_code}",
        )
    slug = team.get("slug", slug)

    for member in members:
        role = "maintainer" if member.is_lead else "member"
        if not await github.add_team_member(slug, member.github_username, role):
            logger.error("Failed to add %s to team %s", member.github_username, slug)

    repo = repository_name(project)
    repo_created = await github.create_repository(repo, f"{project.name} - {project.semester_code}")
    await github.grant_team_repository(slug, repo, "push")
    if not await github.protect_branch(repo, "main", [lead.github_username]):
        logger.error("Failed to protect main branch of %s, continuing", repo)

    await uow.projects.set_repository_url(project.id, github.repository_html_url(repo))
    await uow.commit()
    return ProjectProvisioningResult(
        project=project.name,
        success=True,
        team=team.get("name", slug),
        repo=repo,
        created=repo_created and not team_existed,
    )


async def execute(
    uow: UnitOfWork,
    github: GitHubOrganization,
    *,
    today: date | None = None,
) -> ProvisioningReport:
    """
    Ensure every accepted project that has started owns a GitHub team and repository.

    Each project is reconciled independently; a failure is recorded in the
    report and the remaining projects are still processed.
    """
    today = today or datetime.now(timezone.utc).date()
    projects = await uow.projects.list_ready_for_provisioning(today)
    report = ProvisioningReport()
    for project in projects:
        try:
            result = await _provision_one(uow, github, project)
        except ProvisioningSkipped as exc:
            result = ProjectProvisioningResult(project=project.name, success=False, error=str(exc))
        except Exception as exc:
            logger.error("Error provisioning project %s: %s", project.name, exc, exc_info=True)
            await uow.rollback()
            result = ProjectProvisioningResult(project=project.name, success=False, error=str(exc))
        report.results.append(result)
    logger.info("Project provisioning processed %d project(s)", report.processed)
    return report
