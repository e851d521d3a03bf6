from __future__ import annotations

import logging
from typing import Any

import httpx

from src.application.errors import InfrastructureError
from src.infrastructure.email.models import EmailMessage, EmailService

logger = logging.getLogger(__name__)


class ResendEmailService(EmailService):
    """Resend provider for transactional emails."""

    def __init__(
        self,
        *,
        api_key: str,
        api_url: str = "https://api.resend.com/emails",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize Resend email service.

        Args:
            api_key: Resend API key, sent as a bearer token
            api_url: Resend send endpoint
            timeout: HTTP request timeout in seconds
            transport: optional httpx transport (tests inject a MockTransport)
        """
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self.transport = transport

    def _payload(self, message: EmailMessage) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "from": message.sender,
            "to": list(message.to),
            "subject": message.subject,
        }
        if message.html:
            payload["html"] = message.html
        if message.text:
            payload["text"] = message.text
        if message.reply_to:
            payload["reply_to"] = message.reply_to
        if message.bcc:
            payload["bcc"] = list(message.bcc)
        return payload

    async def send(self, message: EmailMessage) -> None:
        """
        Send an email message using the Resend API.

        Raises:
            InfrastructureError: If the request fails or Resend rejects the message
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.api_url, json=self._payload(message), headers=headers
                )
        except httpx.HTTPError as exc:
            logger.error("Resend HTTP error: %s", exc)
            raise InfrastructureError(f"Failed to send email via Resend: {exc}") from exc

        if response.status_code >= 400:
            error_msg = f"Resend API error: {response.status_code} - {response.text}"
            logger.error(error_msg)
            raise InfrastructureError(error_msg)

        try:
            message_id = response.json().get("id", "unknown")
        except ValueError:
            message_id = "unknown"
        logger.info(
            "Email sent via Resend: subject=%s to=%s id=%s",
            message.subject,
            ",".join(message.to),
            message_id,
        )
