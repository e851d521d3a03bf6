from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class ChatInviter:
    async def invite(self, email: str, real_name: str) -> bool:  # pragma: no cover - interface
        raise NotImplementedError


class LoggingChatInviter(ChatInviter):
    """Used when no chat workspace is configured; records invites instead of sending them."""

    def __init__(self) -> None:
        self.invited: list[tuple[str, str]] = []

    async def invite(self, email: str, real_name: str) -> bool:
        self.invited.append((email, real_name))
        logger.info("Chat invite (logging provider): email=%s name=%s", email, real_name)
        return True
