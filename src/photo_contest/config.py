"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    session_secret: str
    public_base_url: str = "http://localhost:3000"
    data_dir: Path = Path("data")
    photos_file: str = "photos.json"
    votes_file: str = "votes.json"
    uploads_dir: Path = Path("uploads")
    max_upload_bytes: int = MAX_UPLOAD_BYTES
    notify_timeout_seconds: float = 5.0
    post_login_redirect: str = "/#concurs-fotos"
    google_client_id: str | None = None
    google_client_secret: str | None = None
    facebook_app_id: str | None = None
    facebook_app_secret: str | None = None
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def photos_path(self) -> Path:
        """Location of the photo ledger file."""
        return self.data_dir / self.photos_file

    @property
    def votes_path(self) -> Path:
        """Location of the vote ledger file."""
        return self.data_dir / self.votes_file


def callback_url(base_url: str, provider: str) -> str:
    """Build the OAuth redirect URI registered with a provider."""
    return f"{base_url.rstrip('/')}/auth/{provider}/callback"
