from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from src.application.notifications.decision_email import TEMPLATE_KEY, build_decision_context
from src.config.settings import Settings
from src.domain.models.application import Application
from src.domain.models.profile import Profile
from src.domain.value_objects.application_status import ApplicationStatus
from src.infrastructure.chat.models import ChatInviter
from src.infrastructure.email.models import EmailMessage, EmailService
from src.infrastructure.email.renderer.engine import EmailTemplateRenderer

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class NotificationReport:
    """What was delivered. Informational only; never feeds back into the decision result."""

    chat_invited: bool = False
    email_sent: bool = False


class ApplicationDecisionNotifier:
    """Sends the chat invite and the decision email once a decision is durable."""

    def __init__(
        self,
        *,
        settings: Settings,
        email_service: EmailService,
        renderer: EmailTemplateRenderer,
        chat_inviter: ChatInviter | None = None,
    ) -> None:
        self.settings = settings
        self.email_service = email_service
        self.renderer = renderer
        self.chat_inviter = chat_inviter

    async def notify(
        self,
        application: Application,
        profile: Profile,
        status: ApplicationStatus,
    ) -> NotificationReport:
        invite = self._invite_to_chat(application, profile, status)
        email = self._send_decision_email(application, profile, status)
        chat_invited, email_sent = await asyncio.gather(invite, email)
        return NotificationReport(chat_invited=chat_invited, email_sent=email_sent)

    async def _invite_to_chat(
        self, application: Application, profile: Profile, status: ApplicationStatus
    ) -> bool:
        if status is not ApplicationStatus.ACCEPTED or self.chat_inviter is None:
            return False
        try:
            return await self.chat_inviter.invite(
                profile.email, profile.display_name(application.full_name)
            )
        except Exception as exc:
            logger.warning("Chat invitation error for %s: %s", profile.email, exc)
            return False

    async def _send_decision_email(
        self, application: Application, profile: Profile, status: ApplicationStatus
    ) -> bool:
        try:
            rendered = self.renderer.render(
                template_key=TEMPLATE_KEY,
                settings=self.settings,
                context=build_decision_context(
                    application,
                    profile,
                    status,
                    club_name=self.settings.email_from_name,
                    applications_url=self.settings.email_applications_url,
                ),
                locale=self.settings.email_default_locale,
            )
            await self.email_service.send(
                EmailMessage.from_rendered(
                    rendered,
                    to=[profile.email],
                    from_email=self.settings.email_from_address,
                    from_name=self.settings.email_from_name,
                    reply_to=self.settings.email_reply_to,
                )
            )
        except Exception as exc:
            logger.warning("Decision email to %s failed: %s", profile.email, exc)
            return False
        return True
