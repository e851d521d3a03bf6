from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template, TemplateNotFound, select_autoescape
from markupsafe import Markup

from src.config.settings import Settings
from src.infrastructure.email.models import RenderedEmail

DEFAULT_LOCALE = "en"
LAYOUT = "_layout.html.j2"


@dataclass(slots=True)
class EmailTemplateRenderer:
    """
    Renders ``<locale>/<template_key>/{subject.txt,body.txt,body.html}.j2``.

    Templates missing for the requested locale are taken from the default
    locale. The HTML body is optional and, when present, is wrapped in the
    locale's ``_layout.html.j2``.
    """

    base_path: Path
    env: Environment

    @classmethod
    def create_default(cls) -> EmailTemplateRenderer:
        base = Path(__file__).resolve().parent.parent / "templates"
        env = Environment(
            loader=FileSystemLoader(str(base)),
            autoescape=select_autoescape(["html", "xml", "html.j2"]),
            enable_async=False,
        )
        return cls(base_path=base, env=env)

    def _load(self, locale: str, name: str) -> Template:
        try:
            return self.env.get_template(f"{locale}/{name}")
        except TemplateNotFound:
            if locale == DEFAULT_LOCALE:
                raise
            return self.env.get_template(f"{DEFAULT_LOCALE}/{name}")

    def _load_optional(self, locale: str, name: str) -> Template | None:
        try:
            return self._load(locale, name)
        except TemplateNotFound:
            return None

    @staticmethod
    def common_context(settings: Settings) -> dict[str, Any]:
        return {
            "app": {
                "name": settings.email_from_name,
                "club_name": settings.email_club_name,
                "primary_color": settings.email_primary_color,
            }
        }

    def render(
        self,
        *,
        template_key: str,
        settings: Settings,
        context: dict[str, Any],
        locale: str | None = None,
    ) -> RenderedEmail:
        loc = (locale or settings.email_default_locale or DEFAULT_LOCALE).lower()
        ctx = {**self.common_context(settings), **context}

        subject = self._load(loc, f"{template_key}/subject.txt.j2").render(ctx)
        text = self._load(loc, f"{template_key}/body.txt.j2").render(ctx)

        html = None
        body_tpl = self._load_optional(loc, f"{template_key}/body.html.j2")
        if body_tpl is not None:
            inner = body_tpl.render(ctx)
            layout = self._load_optional(loc, LAYOUT)
            html = layout.render({**ctx, "content": Markup(inner)}) if layout else inner

        # Subjects are single-line even when the template spans several lines
        return RenderedEmail(subject=" ".join(subject.split()), text=text.strip(), html=html)
