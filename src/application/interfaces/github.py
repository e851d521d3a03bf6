from __future__ import annotations

from typing import Any, Protocol


class GitHubOrganization(Protocol):
    async def get_team(self, slug: str) -> dict[str, Any] | None: ...

    async def create_team(self, name: str, description: str) -> dict[str, Any]: ...

    async def add_team_member(self, team_slug: str, username: str, role: str) -> bool: ...

    async def create_repository(self, name: str, description: str) -> bool: ...

    async def grant_team_repository(
        self, team_slug: str, repo_name: str, permission: str = "push"
    ) -> None: ...

    async def protect_branch(
        self, repo_name: str, branch: str, allowed_users: list[str]
    ) -> bool: ...

    def repository_html_url(self, repo_name: str) -> str: ...
