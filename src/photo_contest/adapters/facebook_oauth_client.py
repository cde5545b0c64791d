"""Facebook OAuth client adapter."""

from dataclasses import dataclass
from urllib.parse import urlencode

import httpx

from photo_contest.domain.models import Identity

GRAPH_VERSION = "v19.0"
AUTHORIZE_URL = f"https://www.facebook.com/{GRAPH_VERSION}/dialog/oauth"
GRAPH_URL = f"https://graph.facebook.com/{GRAPH_VERSION}"


@dataclass
class HttpxFacebookOAuthClient:
    """Facebook login flow implemented with httpx."""

    app_id: str
    app_secret: str
    http_client: httpx.AsyncClient
    provider: str = "facebook"

    @classmethod
    def create(cls, app_id: str, app_secret: str) -> "HttpxFacebookOAuthClient":
        """Create a Facebook client with a managed httpx session."""
        return cls(
            app_id=app_id,
            app_secret=app_secret,
            http_client=httpx.AsyncClient(),
        )

    def authorization_url(self, redirect_uri: str, state: str) -> str:
        params = {
            "client_id": self.app_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "state": state,
        }
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    async def fetch_identity(self, code: str, redirect_uri: str) -> Identity:
        """Exchange the code and read id and display name from the Graph API."""
        token_response = await self.http_client.get(
            f"{GRAPH_URL}/oauth/access_token",
            params={
                "client_id": self.app_id,
                "client_secret": self.app_secret,
                "code": code,
                "redirect_uri": redirect_uri,
            },
            timeout=10,
        )
        token_response.raise_for_status()
        access_token = token_response.json().get("access_token")
        if not access_token:
            raise RuntimeError("Facebook token response has no access_token")
        profile_response = await self.http_client.get(
            f"{GRAPH_URL}/me",
            params={"fields": "id,name", "access_token": access_token},
            timeout=10,
        )
        profile_response.raise_for_status()
        profile = profile_response.json()
        return Identity(
            provider=self.provider,
            subject_id=str(profile["id"]),
            name=str(profile.get("name") or ""),
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
