"""Login, logout and identity endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from photo_contest.domain.errors import NotFound
from photo_contest.domain.models import Identity  # noqa: TC001
from photo_contest.services.auth import identity_from_session, identity_to_session

if TYPE_CHECKING:
    from photo_contest.containers import AppContainer

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user"
SESSION_STATE_KEY = "oauth_state"


def current_identity(request: Request) -> Identity | None:
    """Resolve the identity stored in the session cookie, if any."""
    return identity_from_session(request.session.get(SESSION_USER_KEY))


@router.get("/me")
async def me(identity: Identity | None = Depends(current_identity)) -> JSONResponse:
    """Tell the frontend whether the caller is signed in."""
    if identity is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED, content={"ok": False}
        )
    return JSONResponse(
        content={
            "ok": True,
            "user": {"provider": identity.provider, "name": identity.name},
        }
    )


@router.post("/logout")
async def logout(request: Request) -> dict[str, bool]:
    """Forget the signed-in identity."""
    request.session.pop(SESSION_USER_KEY, None)
    return {"ok": True}


@router.get("/auth/{provider}")
async def login(provider: str, request: Request) -> RedirectResponse:
    """Send the browser to the provider consent page."""
    container: AppContainer = request.app.state.container
    url, state = container.auth_service.begin_login(provider)
    request.session[SESSION_STATE_KEY] = state
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)


@router.get("/auth/{provider}/callback")
async def login_callback(
    provider: str,
    request: Request,
    code: str | None = None,
    state: str | None = None,
) -> RedirectResponse:
    """Finish the OAuth flow and remember the identity in the session."""
    container: AppContainer = request.app.state.container
    expected_state = request.session.pop(SESSION_STATE_KEY, None)
    try:
        identity = await container.auth_service.complete_login(
            provider, code, state, expected_state
        )
    except NotFound:
        raise
    except Exception:
        logger.exception("OAuth login failed", extra={"provider": provider})
        return RedirectResponse("/", status_code=status.HTTP_302_FOUND)
    request.session[SESSION_USER_KEY] = identity_to_session(identity)
    return RedirectResponse(
        container.settings.post_login_redirect, status_code=status.HTTP_302_FOUND
    )
