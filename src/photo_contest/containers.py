"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from photo_contest.adapters.facebook_oauth_client import HttpxFacebookOAuthClient
from photo_contest.adapters.google_oauth_client import HttpxGoogleOAuthClient
from photo_contest.adapters.json_photo_repository import JsonPhotoRepository
from photo_contest.adapters.json_vote_repository import JsonVoteRepository
from photo_contest.adapters.local_image_store import LocalImageStore
from photo_contest.adapters.websocket_notifier import WebSocketHub
from photo_contest.config import Settings
from photo_contest.services.auth import AuthService, OAuthClient
from photo_contest.services.photos import PhotoService
from photo_contest.services.votes import VoteService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    hub: WebSocketHub
    auth_service: AuthService
    photo_service: PhotoService
    vote_service: VoteService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    hub = WebSocketHub(send_timeout=resolved_settings.notify_timeout_seconds)
    vote_repository = JsonVoteRepository(resolved_settings.votes_path)
    photo_repository = JsonPhotoRepository(resolved_settings.photos_path)
    image_store = LocalImageStore(resolved_settings.uploads_dir)
    vote_service = VoteService(repository=vote_repository, notifier=hub)
    photo_service = PhotoService(
        photo_repository=photo_repository,
        vote_repository=vote_repository,
        image_store=image_store,
        notifier=hub,
        max_upload_bytes=resolved_settings.max_upload_bytes,
    )

    google_client: HttpxGoogleOAuthClient | None = None
    facebook_client: HttpxFacebookOAuthClient | None = None
    clients: dict[str, OAuthClient] = {}
    if resolved_settings.google_client_id and resolved_settings.google_client_secret:
        google_client = HttpxGoogleOAuthClient.create(
            resolved_settings.google_client_id,
            resolved_settings.google_client_secret,
        )
        clients[google_client.provider] = google_client
    if resolved_settings.facebook_app_id and resolved_settings.facebook_app_secret:
        facebook_client = HttpxFacebookOAuthClient.create(
            resolved_settings.facebook_app_id,
            resolved_settings.facebook_app_secret,
        )
        clients[facebook_client.provider] = facebook_client
    auth_service = AuthService(
        base_url=resolved_settings.public_base_url, clients=clients
    )

    async def close_resources() -> None:
        await hub.close()
        if google_client is not None:
            await google_client.close()
        if facebook_client is not None:
            await facebook_client.close()

    return AppContainer(
        settings=resolved_settings,
        hub=hub,
        auth_service=auth_service,
        photo_service=photo_service,
        vote_service=vote_service,
        close_resources=close_resources,
    )
