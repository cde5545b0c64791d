"""Google OAuth client adapter."""

from dataclasses import dataclass
from urllib.parse import urlencode

import httpx

from photo_contest.domain.models import Identity

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"


@dataclass
class HttpxGoogleOAuthClient:
    """Google authorization-code flow implemented with httpx."""

    client_id: str
    client_secret: str
    http_client: httpx.AsyncClient
    provider: str = "google"

    @classmethod
    def create(cls, client_id: str, client_secret: str) -> "HttpxGoogleOAuthClient":
        """Create a Google client with a managed httpx session."""
        return cls(
            client_id=client_id,
            client_secret=client_secret,
            http_client=httpx.AsyncClient(),
        )

    def authorization_url(self, redirect_uri: str, state: str) -> str:
        """Build the consent URL, asking for the basic profile only."""
        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": "profile",
            "state": state,
        }
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    async def fetch_identity(self, code: str, redirect_uri: str) -> Identity:
        """Exchange the code for a token and read the user's profile."""
        token_response = await self.http_client.post(
            TOKEN_URL,
            data={
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "code": code,
                "grant_type": "authorization_code",
                "redirect_uri": redirect_uri,
            },
            timeout=10,
        )
        token_response.raise_for_status()
        access_token = token_response.json().get("access_token")
        if not access_token:
            raise RuntimeError("Google token response has no access_token")
        profile_response = await self.http_client.get(
            USERINFO_URL,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=10,
        )
        profile_response.raise_for_status()
        profile = profile_response.json()
        return Identity(
            provider=self.provider,
            subject_id=str(profile["sub"]),
            name=str(profile.get("name") or ""),
        )

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()
