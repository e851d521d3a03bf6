from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    PROSPECT = "prospect"
    MEMBER = "member"
    BOARD = "board"
    E_BOARD = "e-board"

    def can_review_applications(self) -> bool:
        return self in {Role.BOARD, Role.E_BOARD}

    def is_upgradable_on_acceptance(self) -> bool:
        # Board tiers are managed by hand; acceptance only promotes prospects.
        return self is Role.PROSPECT
