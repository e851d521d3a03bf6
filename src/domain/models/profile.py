from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(slots=True)
class Profile:
    id: UUID
    email: str
    full_name: str | None = None
    class_year: str | None = None
    github_username: str | None = None

    def display_name(self, fallback: str | None = None) -> str:
        return self.full_name or fallback or self.email
