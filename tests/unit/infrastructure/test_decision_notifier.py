from __future__ import annotations

from uuid import uuid4

import pytest

from src.config.settings import Settings
from src.domain.models.application import Application
from src.domain.models.profile import Profile
from src.domain.value_objects.application_status import ApplicationStatus
from src.domain.value_objects.application_type import ApplicationType
from src.infrastructure.chat.models import ChatInviter, LoggingChatInviter
from src.infrastructure.email.models import EmailService
from src.infrastructure.email.providers.logging_provider import LoggingEmailService
from src.infrastructure.email.renderer.engine import EmailTemplateRenderer
from src.infrastructure.services.decision_notifier import ApplicationDecisionNotifier


class FailingEmailService(EmailService):
    async def send(self, message) -> None:
        raise RuntimeError("provider down")


class FailingInviter(ChatInviter):
    async def invite(self, email: str, real_name: str) -> bool:
        raise RuntimeError("slack down")


@pytest.fixture()
def settings() -> Settings:
    return Settings.model_validate(
        {
            "database_url": "sqlite+aiosqlite:///unused.db",
            "email_from_name": "Claude Builder Club",
            "email_from_address": "noreply@claudemsu.org",
        }
    )


def make_notifier(settings, *, email_service=None, chat_inviter=None):
    return ApplicationDecisionNotifier(
        settings=settings,
        email_service=email_service or LoggingEmailService(),
        renderer=EmailTemplateRenderer.create_default(),
        chat_inviter=chat_inviter,
    )


def make_pair(application_type=ApplicationType.PROJECT, **fields):
    user_id = uuid4()
    application = Application.create(
        user_id=user_id,
        application_type=application_type,
        full_name="Sparty Green",
        class_year="2027",
        **fields,
    )
    profile = Profile(id=user_id, email="sparty@msu.edu", full_name=None)
    return application, profile


@pytest.mark.asyncio
async def test_acceptance_invites_and_emails(settings):
    email_service = LoggingEmailService()
    inviter = LoggingChatInviter()
    notifier = make_notifier(settings, email_service=email_service, chat_inviter=inviter)
    application, profile = make_pair(project_id=uuid4())

    report = await notifier.notify(application, profile, ApplicationStatus.ACCEPTED)

    assert report.chat_invited is True
    assert report.email_sent is True
    assert inviter.invited == [("sparty@msu.edu", "Sparty Green")]
    [message] = email_service.sent
    assert message.to == ["sparty@msu.edu"]
    assert message.from_email == "noreply@claudemsu.org"
    assert message.from_name == "Claude Builder Club"
    assert message.subject == "Project Application Accepted | Claude Builder Club"
    assert message.html and message.text


@pytest.mark.asyncio
async def test_rejection_skips_chat_invite(settings):
    email_service = LoggingEmailService()
    inviter = LoggingChatInviter()
    notifier = make_notifier(settings, email_service=email_service, chat_inviter=inviter)
    application, profile = make_pair(ApplicationType.BOARD, board_position="Secretary")

    report = await notifier.notify(application, profile, ApplicationStatus.REJECTED)

    assert report.chat_invited is False
    assert report.email_sent is True
    assert inviter.invited == []
    assert email_service.sent[0].subject == (
        "Board Application Update - Secretary | Claude Builder Club"
    )


@pytest.mark.asyncio
async def test_chat_failure_does_not_block_email(settings):
    email_service = LoggingEmailService()
    notifier = make_notifier(settings, email_service=email_service, chat_inviter=FailingInviter())
    application, profile = make_pair(ApplicationType.CLUB_ADMISSION)

    report = await notifier.notify(application, profile, ApplicationStatus.ACCEPTED)

    assert report.chat_invited is False
    assert report.email_sent is True
    assert len(email_service.sent) == 1


@pytest.mark.asyncio
async def test_email_failure_is_reported_not_raised(settings):
    inviter = LoggingChatInviter()
    notifier = make_notifier(settings, email_service=FailingEmailService(), chat_inviter=inviter)
    application, profile = make_pair(class_id=uuid4(), application_type=ApplicationType.CLASS)

    report = await notifier.notify(application, profile, ApplicationStatus.ACCEPTED)

    assert report.chat_invited is True
    assert report.email_sent is False


@pytest.mark.asyncio
async def test_no_inviter_configured(settings):
    notifier = make_notifier(settings)
    application, profile = make_pair(project_id=uuid4())

    report = await notifier.notify(application, profile, ApplicationStatus.ACCEPTED)

    assert report.chat_invited is False
    assert report.email_sent is True
