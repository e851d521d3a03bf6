from __future__ import annotations

from sqlalchemy import select

from src.domain.value_objects.member_roles import ProjectRole
from src.infrastructure.db.orm.membership import ProjectMemberORM
from src.infrastructure.db.orm.project import ProjectORM


class StubGitHub:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    async def get_team(self, slug):
        return None

    async def create_team(self, name, description):
        self.calls.append(("create_team", name))
        return {"name": name, "slug": "campus-navigator-f26"}

    async def add_team_member(self, team_slug, username, role):
        self.calls.append(("add_team_member", username, role))
        return True

    async def create_repository(self, name, description):
        self.calls.append(("create_repository", name))
        return True

    async def grant_team_repository(self, team_slug, repo_name, permission="push"):
        self.calls.append(("grant", team_slug, repo_name, permission))

    async def protect_branch(self, repo_name, branch, allowed_users):
        self.calls.append(("protect", repo_name, branch, tuple(allowed_users)))
        return True

    def repository_html_url(self, repo_name):
        return f"https://github.com/Claude-Builder-Club-MSU/{repo_name}"


async def test_provision_requires_github_token(client):
    response = await client.post("/api/v1/projects/provision")
    assert response.status_code == 500
    assert response.json() == {
        "error": "GitHub organization token not configured",
        "code": "infrastructure_error",
    }


async def test_provision_creates_team_and_repository(app, client, seeded_users, seeded_project):
    github = StubGitHub()
    app.state.github_client = github
    async with app.state.session_factory() as session:  # type: ignore[attr-defined]
        session.add(
            ProjectMemberORM(
                project_id=seeded_project,
                user_id=seeded_users["prospect"],
                role=ProjectRole.LEAD,
            )
        )
        await session.commit()

    response = await client.post("/api/v1/projects/provision")
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["message"] == "Processed projects"
    assert body["processed"] == 1
    result = body["results"][0]
    assert result["project"] == "Campus Navigator"
    assert result["success"] is True
    assert result["repo"] == "campus-navigator-f26"
    assert result["created"] is True

    assert ("add_team_member", "sparty", "maintainer") in github.calls
    assert ("grant", "campus-navigator-f26", "campus-navigator-f26", "push") in github.calls

    async with app.state.session_factory() as session:  # type: ignore[attr-defined]
        url = await session.scalar(
            select(ProjectORM.repository_url).where(ProjectORM.id == seeded_project)
        )
    assert url == "https://github.com/Claude-Builder-Club-MSU/campus-navigator-f26"

    again = await client.post("/api/v1/projects/provision")
    assert again.json() == {
        "message": "No projects ready for automation",
        "processed": 0,
        "results": [],
    }
