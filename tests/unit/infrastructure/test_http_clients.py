from __future__ import annotations

import json

import httpx
import pytest

from src.application.errors import InfrastructureError
from src.infrastructure.chat.slack import SlackInviteClient
from src.infrastructure.email.models import EmailMessage
from src.infrastructure.email.providers.resend_provider import ResendEmailService
from src.infrastructure.github.client import GitHubOrgClient


def recording_transport(handler):
    requests: list[httpx.Request] = []

    def wrapped(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    return httpx.MockTransport(wrapped), requests


@pytest.mark.asyncio
async def test_slack_invite_posts_admin_invite():
    transport, requests = recording_transport(
        lambda request: httpx.Response(200, json={"ok": True})
    )
    client = SlackInviteClient(bot_token="xoxb-1", team_id="T123", transport=transport)

    assert await client.invite("sparty@msu.edu", "Sparty Green") is True

    [request] = requests
    assert str(request.url) == "https://slack.com/api/admin.users.invite"
    assert request.headers["Authorization"] == "Bearer xoxb-1"
    assert json.loads(request.content) == {
        "team_id": "T123",
        "email": "sparty@msu.edu",
        "real_name": "Sparty Green",
        "resend": True,
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"ok": False, "error": "already_invited"}),
        httpx.Response(500, text="boom"),
    ],
)
async def test_slack_invite_failures_return_false(response):
    transport, _ = recording_transport(lambda request: response)
    client = SlackInviteClient(bot_token="xoxb-1", team_id="T123", transport=transport)

    assert await client.invite("sparty@msu.edu", "Sparty Green") is False


@pytest.mark.asyncio
async def test_resend_sends_payload():
    transport, requests = recording_transport(
        lambda request: httpx.Response(200, json={"id": "email_123"})
    )
    service = ResendEmailService(api_key="re_test", transport=transport)

    await service.send(
        EmailMessage(
            subject="Application Accepted | Claude Builder Club",
            to=["sparty@msu.edu"],
            text="Hi",
            html="<p>Hi</p>",
            from_email="noreply@claudemsu.org",
            from_name="Claude Builder Club",
            reply_to="board@claudemsu.org",
        )
    )

    [request] = requests
    assert request.headers["Authorization"] == "Bearer re_test"
    assert json.loads(request.content) == {
        "from": "Claude Builder Club <noreply@claudemsu.org>",
        "to": ["sparty@msu.edu"],
        "subject": "Application Accepted | Claude Builder Club",
        "html": "<p>Hi</p>",
        "text": "Hi",
        "reply_to": "board@claudemsu.org",
    }


@pytest.mark.asyncio
async def test_resend_error_raises_infrastructure_error():
    transport, _ = recording_transport(lambda request: httpx.Response(422, text="invalid from"))
    service = ResendEmailService(api_key="re_test", transport=transport)

    with pytest.raises(InfrastructureError, match="422"):
        await service.send(EmailMessage(subject="s", to=["a@msu.edu"], text="t"))


@pytest.mark.asyncio
async def test_resend_transport_error_raises_infrastructure_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    service = ResendEmailService(api_key="re_test", transport=httpx.MockTransport(handler))

    with pytest.raises(InfrastructureError):
        await service.send(EmailMessage(subject="s", to=["a@msu.edu"], text="t"))


def github_client(handler):
    transport, requests = recording_transport(handler)
    client = GitHubOrgClient(token="ghp_x", org="club", transport=transport)
    return client, requests


@pytest.mark.asyncio
async def test_github_team_lookup_and_creation():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(404, json={"message": "Not Found"})
        return httpx.Response(201, json={"name": "Nav (F26)", "slug": "nav-f26"})

    client, requests = github_client(handler)

    assert await client.get_team("nav-f26") is None
    team = await client.create_team("Nav (F26)", "Project team for Nav - F26")

    assert team["slug"] == "nav-f26"
    assert requests[0].url.path == "/orgs/club/teams/nav-f26"
    assert requests[0].headers["Authorization"] == "token ghp_x"
    assert json.loads(requests[1].content)["privacy"] == "closed"


@pytest.mark.asyncio
async def test_github_create_repository_tolerates_existing():
    client, _ = github_client(
        lambda request: httpx.Response(
            422,
            json={
                "message": "Repository creation failed.",
                "errors": [{"message": "name already exists on this account"}],
            },
        )
    )

    assert await client.create_repository("nav-f26", "Nav - F26") is False


@pytest.mark.asyncio
async def test_github_create_repository_other_errors_raise():
    client, _ = github_client(lambda request: httpx.Response(403, json={"message": "Forbidden"}))

    with pytest.raises(InfrastructureError, match="Forbidden"):
        await client.create_repository("nav-f26", "Nav - F26")


@pytest.mark.asyncio
async def test_github_grant_and_member_calls():
    def handler(request: httpx.Request) -> httpx.Response:
        if "/memberships/" in request.url.path:
            return httpx.Response(404, json={"message": "Not Found"})
        return httpx.Response(500, json={"message": "Server Error"})

    client, requests = github_client(handler)

    assert await client.add_team_member("nav-f26", "ghost", "member") is True
    with pytest.raises(InfrastructureError, match="Server Error"):
        await client.grant_team_repository("nav-f26", "nav-f26")
    assert requests[1].url.path == "/orgs/club/teams/nav-f26/repos/club/nav-f26"
    assert json.loads(requests[1].content) == {"permission": "push"}
    assert client.repository_html_url("nav-f26") == "https://github.com/club/nav-f26"


@pytest.mark.asyncio
async def test_github_protect_branch_reports_result():
    client, requests = github_client(lambda request: httpx.Response(403, json={}))

    assert await client.protect_branch("nav-f26", "main", ["alice"]) is False
    body = json.loads(requests[0].content)
    assert body["restrictions"]["users"] == ["alice"]
    assert body["required_pull_request_reviews"]["required_approving_review_count"] == 1
