"""OAuth login flow and session identity helpers."""

import logging
import secrets
from dataclasses import dataclass, field
from typing import Protocol

from photo_contest.config import callback_url
from photo_contest.domain.errors import NotFound, Unauthenticated
from photo_contest.domain.models import Identity

_logger = logging.getLogger(__name__)


class OAuthClient(Protocol):
    """Interface for a provider's authorization-code flow."""

    provider: str

    def authorization_url(self, redirect_uri: str, state: str) -> str:
        """Return the provider consent page URL."""

    async def fetch_identity(self, code: str, redirect_uri: str) -> Identity:
        """Exchange an authorization code for the user's identity."""


@dataclass
class AuthService:
    """Drives the OAuth login flow for the configured providers."""

    base_url: str
    clients: dict[str, OAuthClient] = field(default_factory=dict)

    def providers(self) -> list[str]:
        return sorted(self.clients)

    def begin_login(self, provider: str) -> tuple[str, str]:
        """Return the consent URL and the state value to remember."""
        client = self._client(provider)
        state = secrets.token_urlsafe(16)
        url = client.authorization_url(callback_url(self.base_url, provider), state)
        return url, state

    async def complete_login(
        self,
        provider: str,
        code: str | None,
        state: str | None,
        expected_state: str | None,
    ) -> Identity:
        """Validate the callback and resolve the provider identity."""
        client = self._client(provider)
        if not state or not expected_state or state != expected_state:
            raise Unauthenticated("Invalid OAuth state.")
        if not code:
            raise Unauthenticated("Missing authorization code.")
        identity = await client.fetch_identity(
            code, callback_url(self.base_url, provider)
        )
        _logger.info("Login succeeded: user_id=%s", identity.user_id)
        return identity

    def _client(self, provider: str) -> OAuthClient:
        client = self.clients.get(provider)
        if client is None:
            raise NotFound(f"Unknown login provider: {provider}")
        return client


def identity_to_session(identity: Identity) -> dict[str, str]:
    """Serialize an identity for the signed session cookie."""
    return {
        "provider": identity.provider,
        "id": identity.subject_id,
        "name": identity.name,
    }


def identity_from_session(data: object) -> Identity | None:
    """Rebuild the identity stored in a session, if any."""
    if not isinstance(data, dict):
        return None
    provider = data.get("provider")
    subject_id = data.get("id")
    if not provider or not subject_id:
        return None
    return Identity(
        provider=str(provider),
        subject_id=str(subject_id),
        name=str(data.get("name") or ""),
    )
