from __future__ import annotations

from typing import Any

from src.domain.models.application import Application
from src.domain.models.profile import Profile
from src.domain.value_objects.application_status import ApplicationStatus
from src.domain.value_objects.application_type import ApplicationType

TEMPLATE_KEY = "application_decision"


def application_target(
    application_type: ApplicationType | str,
    board_position: str | None,
    *,
    club_name: str,
) -> str:
    """Human-readable name of what the applicant applied to."""
    try:
        kind = ApplicationType(application_type)
    except ValueError:
        return club_name
    if kind is ApplicationType.BOARD:
        return board_position or "Board Position"
    if kind is ApplicationType.PROJECT:
        return "the project"
    if kind is ApplicationType.CLASS:
        return "the class"
    return club_name


def build_decision_context(
    application: Application,
    profile: Profile,
    status: ApplicationStatus,
    *,
    club_name: str,
    applications_url: str,
) -> dict[str, Any]:
    accepted = status is ApplicationStatus.ACCEPTED
    return {
        "accepted": accepted,
        "title": "Application Accepted" if accepted else "Application Update",
        "status": status.value,
        "application_type": application.application_type.value,
        "board_position": application.board_position,
        "user_name": profile.display_name(application.full_name),
        "target": application_target(
            application.application_type, application.board_position, club_name=club_name
        ),
        "places_into_target": application.application_type.places_into_target(),
        "club_name": club_name,
        "applications_url": applications_url,
    }
