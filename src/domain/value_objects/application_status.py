from __future__ import annotations

from enum import Enum


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    def is_decision(self) -> bool:
        return self in {ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED}
