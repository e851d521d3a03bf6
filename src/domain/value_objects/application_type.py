from __future__ import annotations

from enum import Enum


class ApplicationType(str, Enum):
    CLUB_ADMISSION = "club_admission"
    BOARD = "board"
    PROJECT = "project"
    CLASS = "class"

    def places_into_target(self) -> bool:
        """Project and class applications end with a membership row on acceptance."""
        return self in {ApplicationType.PROJECT, ApplicationType.CLASS}
