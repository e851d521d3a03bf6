from __future__ import annotations

import logging
from typing import Any

import httpx

from src.application.errors import InfrastructureError
from src.application.interfaces.github import GitHubOrganization

logger = logging.getLogger(__name__)


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    parts = [str(data.get("message", ""))]
    for item in data.get("errors") or []:
        if isinstance(item, dict) and item.get("message"):
            parts.append(str(item["message"]))
    return "; ".join(p for p in parts if p) or f"HTTP {resp.status_code}"


class GitHubOrgClient(GitHubOrganization):
    """Thin GitHub REST client scoped to one organization."""

    def __init__(
        self,
        *,
        token: str,
        org: str,
        api_url: str = "https://api.github.com",
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.org = org
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.headers = {
            "Authorization": f"token {token}",
            "Accept": "application/vnd.github.v3+json",
        }

    def repository_html_url(self, repo_name: str) -> str:
        return f"https://github.com/{self.org}/{repo_name}"

    async def _request(
        self, method: str, path: str, json: dict[str, Any] | None = None
    ) -> httpx.Response:
        async with httpx.AsyncClient(
            base_url=self.api_url,
            headers=self.headers,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            resp = await client.request(method, path, json=json)
        logger.debug("GitHub %s %s -> %s", method, path, resp.status_code)
        return resp

    async def get_team(self, slug: str) -> dict[str, Any] | None:
        resp = await self._request("GET", f"/orgs/{self.org}/teams/{slug}")
        if resp.is_success:
            return resp.json()
        return None

    async def create_team(self, name: str, description: str) -> dict[str, Any]:
        resp = await self._request(
            "POST",
            f"/orgs/{self.org}/teams",
            json={"name": name, "description": description, "privacy": "closed"},
        )
        if not resp.is_success:
            raise InfrastructureError(f"Failed to create team: {_error_message(resp)}")
        return resp.json()

    async def add_team_member(self, team_slug: str, username: str, role: str) -> bool:
        resp = await self._request(
            "PUT",
            f"/orgs/{self.org}/teams/{team_slug}/memberships/{username}",
            json={"role": role},
        )
        # 404 means the GitHub account does not exist; nothing to retry.
        return resp.is_success or resp.status_code == 404

    async def create_repository(self, name: str, description: str) -> bool:
        resp = await self._request(
            "POST",
            f"/orgs/{self.org}/repos",
            json={
                "name": name,
                "description": description,
                "private": True,
                "auto_init": True,
                "has_issues": True,
                "has_projects": True,
                "has_wiki": False,
            },
        )
        if resp.is_success:
            return True
        message = _error_message(resp)
        if "already exists" in message:
            return False
        raise InfrastructureError(f"Failed to create repo: {message}")

    async def grant_team_repository(
        self, team_slug: str, repo_name: str, permission: str = "push"
    ) -> None:
        resp = await self._request(
            "PUT",
            f"/orgs/{self.org}/teams/{team_slug}/repos/{self.org}/{repo_name}",
            json={"permission": permission},
        )
        if not resp.is_success:
            raise InfrastructureError(f"Failed to add team to repo: {_error_message(resp)}")

    async def protect_branch(self, repo_name: str, branch: str, allowed_users: list[str]) -> bool:
        resp = await self._request(
            "PUT",
            f"/repos/{self.org}/{repo_name}/branches/{branch}/protection",
            json={
                "required_status_checks": None,
                "enforce_admins": False,
                "required_pull_request_reviews": {
                    "dismissal_restrictions": {},
                    "dismiss_stale_reviews": True,
                    "require_code_owner_reviews": False,
                    "required_approving_review_count": 1,
                    "require_last_push_approval": False,
                },
                "restrictions": {"users": allowed_users, "teams": [], "apps": []},
                "required_linear_history": False,
                "allow_force_pushes": False,
                "allow_deletions": False,
            },
        )
        return resp.is_success
