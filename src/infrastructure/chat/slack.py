from __future__ import annotations

import logging

import httpx

from src.infrastructure.chat.models import ChatInviter

logger = logging.getLogger(__name__)


class SlackInviteClient(ChatInviter):
    """Invites applicants to the club Slack workspace through ``admin.users.invite``."""

    def __init__(
        self,
        *,
        bot_token: str,
        team_id: str,
        api_url: str = "https://slack.com/api",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.bot_token = bot_token
        self.team_id = team_id
        self.endpoint = f"{api_url.rstrip('/')}/admin.users.invite"
        self.timeout = timeout
        self.transport = transport

    async def invite(self, email: str, real_name: str) -> bool:
        headers = {
            "Authorization": f"Bearer {self.bot_token}",
            "Content-Type": "application/json",
        }
        payload = {
            "team_id": self.team_id,
            "email": email,
            "real_name": real_name,
            "resend": True,
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            resp = await client.post(self.endpoint, headers=headers, json=payload)
        if resp.status_code >= 400:
            logger.warning("Slack invite HTTP error %s: %s", resp.status_code, resp.text)
            return False
        data = resp.json()
        if not data.get("ok"):
            logger.warning("Slack invitation failed for %s: %s", email, data.get("error"))
            return False
        logger.debug("Slack invitation sent to %s", email)
        return True
