from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence


@dataclass(slots=True)
class RenderedEmail:
    """Subject and bodies produced from a template; recipients are added by the sender."""

    subject: str
    text: str
    html: str | None = None


@dataclass(slots=True)
class EmailMessage:
    subject: str
    to: Sequence[str]
    text: str | None = None
    html: str | None = None
    from_email: str | None = None
    from_name: str | None = None
    reply_to: str | None = None
    bcc: Sequence[str] = field(default_factory=tuple)

    @property
    def sender(self) -> str:
        address = self.from_email or "no-reply@example.com"
        return f"{self.from_name} <{address}>" if self.from_name else address

    @classmethod
    def from_rendered(
        cls,
        rendered: RenderedEmail,
        *,
        to: Sequence[str],
        from_email: str | None = None,
        from_name: str | None = None,
        reply_to: str | None = None,
    ) -> EmailMessage:
        return cls(
            subject=rendered.subject,
            to=list(to),
            text=rendered.text,
            html=rendered.html,
            from_email=from_email,
            from_name=from_name,
            reply_to=reply_to,
        )


class EmailService:
    async def send(self, message: EmailMessage) -> None:  # pragma: no cover - interface
        raise NotImplementedError
