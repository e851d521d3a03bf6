from __future__ import annotations

import logging

from src.infrastructure.email.models import EmailMessage, EmailService

logger = logging.getLogger(__name__)


class LoggingEmailService(EmailService):
    """Development provider: logs the envelope and keeps the message in memory."""

    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []

    async def send(self, message: EmailMessage) -> None:
        self.sent.append(message)
        logger.info(
            "Email (logging provider): subject=%s to=%s from=%s reply_to=%s html=%s",
            message.subject,
            ",".join(message.to),
            message.sender,
            message.reply_to or "-",
            message.html is not None,
        )
