"""Tests for the httpx OAuth adapters."""

import asyncio
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from photo_contest.adapters.facebook_oauth_client import HttpxFacebookOAuthClient
from photo_contest.adapters.google_oauth_client import HttpxGoogleOAuthClient

REDIRECT_URI = "http://localhost:3000/auth/google/callback"


def test_google_authorization_url_requests_profile_scope() -> None:
    client = HttpxGoogleOAuthClient(
        client_id="google-id",
        client_secret="google-secret",
        http_client=httpx.AsyncClient(),
    )

    url = urlparse(client.authorization_url(REDIRECT_URI, "state-1"))
    params = parse_qs(url.query)

    assert url.netloc == "accounts.google.com"
    assert params["client_id"] == ["google-id"]
    assert params["scope"] == ["profile"]
    assert params["state"] == ["state-1"]
    assert params["redirect_uri"] == [REDIRECT_URI]


def test_google_fetch_identity_exchanges_code() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.host)
        if request.url.path == "/token":
            form = parse_qs(request.content.decode())
            assert form["code"] == ["auth-code"]
            assert form["grant_type"] == ["authorization_code"]
            return httpx.Response(200, json={"access_token": "token-1"})
        assert request.headers["Authorization"] == "Bearer token-1"
        return httpx.Response(200, json={"sub": "1234", "name": "Alice"})

    client = HttpxGoogleOAuthClient(
        client_id="google-id",
        client_secret="google-secret",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    identity = asyncio.run(client.fetch_identity("auth-code", REDIRECT_URI))

    assert identity.user_id == "google:1234"
    assert identity.name == "Alice"
    assert seen == ["oauth2.googleapis.com", "openidconnect.googleapis.com"]


def test_google_fetch_identity_raises_on_rejected_code() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": "invalid_grant"})

    client = HttpxGoogleOAuthClient(
        client_id="google-id",
        client_secret="google-secret",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.fetch_identity("bad-code", REDIRECT_URI))


def test_facebook_fetch_identity_reads_graph_profile() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        params = parse_qs(request.url.query.decode())
        if request.url.path.endswith("/oauth/access_token"):
            assert params["client_id"] == ["fb-app"]
            return httpx.Response(200, json={"access_token": "fb-token"})
        assert request.url.path.endswith("/me")
        assert params["fields"] == ["id,name"]
        assert params["access_token"] == ["fb-token"]
        return httpx.Response(200, json={"id": "987", "name": "Carol"})

    client = HttpxFacebookOAuthClient(
        app_id="fb-app",
        app_secret="fb-secret",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    identity = asyncio.run(client.fetch_identity("auth-code", REDIRECT_URI))

    assert identity.user_id == "facebook:987"
    assert identity.name == "Carol"


def test_facebook_missing_access_token_is_an_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={})

    client = HttpxFacebookOAuthClient(
        app_id="fb-app",
        app_secret="fb-secret",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    with pytest.raises(RuntimeError):
        asyncio.run(client.fetch_identity("auth-code", REDIRECT_URI))
