from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Store URL; credentials travel inside the DSN
    database_url: str
    log_level: str = "INFO"
    environment: str = "dev"
    # CORS
    cors_allow_origins: str = "*"
    # Email
    email_provider: str = "logging"  # logging | resend
    email_from_name: str = "Claude Builder Club"
    email_from_address: str = "noreply@claudemsu.org"
    email_default_locale: str = "en"
    email_primary_color: str = "#FF6B35"
    email_club_name: str = "Claude Builder Club @ MSU"
    email_applications_url: str = "https://members.claudemsu.dev/applications"
    email_reply_to: str | None = None
    # Resend email provider settings
    resend_api_key: SecretStr | None = None
    resend_api_url: str = "https://api.resend.com/emails"
    # Slack workspace invitations
    slack_bot_token: SecretStr | None = None
    slack_team_id: str | None = None
    slack_api_url: str = "https://slack.com/api"
    # GitHub project provisioning
    github_org_pat: SecretStr | None = None
    github_org: str = "Claude-Builder-Club-MSU"
    github_api_url: str = "https://api.github.com"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("database_url")
    @classmethod
    def ensure_asyncpg_scheme(cls, value: str) -> str:
        if value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql+asyncpg://", 1)
        if value.startswith("postgresql://") and "+" not in value.split("://", 1)[0]:
            return value.replace("postgresql://", "postgresql+asyncpg://", 1)
        return value

    @property
    def cors_allow_origins_list(self) -> list[str]:
        """Convert cors_allow_origins string to list"""
        if isinstance(self.cors_allow_origins, str):
            return [v.strip() for v in self.cors_allow_origins.split(",") if v.strip()]
        return self.cors_allow_origins

    @property
    def chat_invites_enabled(self) -> bool:
        return bool(self.slack_bot_token and self.slack_team_id)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
