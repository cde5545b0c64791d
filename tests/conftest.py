"""Shared test fixtures."""

import copy
import io
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import parse_qs, urlparse

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from photo_contest.adapters.websocket_notifier import WebSocketHub
from photo_contest.config import Settings
from photo_contest.containers import AppContainer
from photo_contest.domain.events import LedgerEvent
from photo_contest.domain.models import Identity
from photo_contest.domain.photos import PhotoRecord
from photo_contest.domain.votes import VoteLedger
from photo_contest.services.auth import AuthService, OAuthClient
from photo_contest.services.notifier import Notifier
from photo_contest.services.photos import (
    ImageStore,
    ImageUpload,
    PhotoRepository,
    PhotoService,
)
from photo_contest.services.votes import VoteRepository, VoteService

ALICE = Identity(provider="google", subject_id="111", name="Alice")
BOB = Identity(provider="google", subject_id="222", name="Bob")
CAROL = Identity(provider="facebook", subject_id="333", name="Carol")


@dataclass
class InMemoryPhotoRepository(PhotoRepository):
    """In-memory photo ledger for tests."""

    photos: list[PhotoRecord] = field(default_factory=list)
    saves: int = 0

    def load(self) -> list[PhotoRecord]:
        return list(self.photos)

    def save(self, photos: list[PhotoRecord]) -> None:
        self.photos = list(photos)
        self.saves += 1


@dataclass
class InMemoryVoteRepository(VoteRepository):
    """In-memory vote ledger for tests."""

    entries: dict[str, list[str]] = field(default_factory=dict)
    saves: int = 0

    def load(self) -> VoteLedger:
        return VoteLedger(entries=copy.deepcopy(self.entries))

    def save(self, ledger: VoteLedger) -> None:
        self.entries = copy.deepcopy(ledger.entries)
        self.saves += 1


@dataclass
class RecordingNotifier(Notifier):
    """Notifier that records events and optionally forwards them."""

    events: list[LedgerEvent] = field(default_factory=list)
    delegate: Notifier | None = None

    async def notify(self, event: LedgerEvent) -> None:
        self.events.append(event)
        if self.delegate is not None:
            await self.delegate.notify(event)


@dataclass
class FakeImageStore(ImageStore):
    """Image store that keeps uploads in memory."""

    stored: list[ImageUpload] = field(default_factory=list)

    def store(self, upload: ImageUpload) -> str:
        self.stored.append(upload)
        return f"/uploads/{len(self.stored)}-{upload.filename}"


@dataclass
class FakeOAuthClient(OAuthClient):
    """OAuth client that resolves codes from a lookup table."""

    provider: str
    identities: dict[str, Identity] = field(default_factory=dict)

    def authorization_url(self, redirect_uri: str, state: str) -> str:
        return (
            f"https://login.test/{self.provider}"
            f"?state={state}&redirect_uri={redirect_uri}"
        )

    async def fetch_identity(self, code: str, redirect_uri: str) -> Identity:
        identity = self.identities.get(code)
        if identity is None:
            raise RuntimeError(f"Unknown code {code}")
        return identity


def image_bytes(fmt: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), color=(200, 30, 30)).save(buffer, format=fmt)
    return buffer.getvalue()


def png_upload(filename: str = "sunset.png") -> ImageUpload:
    return ImageUpload(
        filename=filename, content_type="image/png", content=image_bytes()
    )


def sign_in(client: TestClient, identity: Identity) -> None:
    """Run the OAuth round trip against the fake provider for an identity."""
    start = client.get(f"/auth/{identity.provider}", follow_redirects=False)
    state = parse_qs(urlparse(start.headers["location"]).query)["state"][0]
    response = client.get(
        f"/auth/{identity.provider}/callback",
        params={"code": identity.subject_id, "state": state},
        follow_redirects=False,
    )
    assert response.status_code == 302


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        session_secret="test-secret",
        data_dir=tmp_path / "data",
        uploads_dir=tmp_path / "uploads",
    )


@pytest.fixture
def photo_repository() -> InMemoryPhotoRepository:
    return InMemoryPhotoRepository()


@pytest.fixture
def vote_repository() -> InMemoryVoteRepository:
    return InMemoryVoteRepository()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def image_store() -> FakeImageStore:
    return FakeImageStore()


@pytest.fixture
def vote_service(
    vote_repository: InMemoryVoteRepository, notifier: RecordingNotifier
) -> VoteService:
    return VoteService(repository=vote_repository, notifier=notifier)


@pytest.fixture
def photo_service(
    photo_repository: InMemoryPhotoRepository,
    vote_repository: InMemoryVoteRepository,
    image_store: FakeImageStore,
    notifier: RecordingNotifier,
) -> PhotoService:
    return PhotoService(
        photo_repository=photo_repository,
        vote_repository=vote_repository,
        image_store=image_store,
        notifier=notifier,
        max_upload_bytes=1024 * 1024,
    )


@pytest.fixture
def container(
    settings: Settings,
    photo_service: PhotoService,
    vote_service: VoteService,
    notifier: RecordingNotifier,
) -> AppContainer:
    hub = WebSocketHub()
    notifier.delegate = hub
    identities = {identity.subject_id: identity for identity in (ALICE, BOB, CAROL)}
    auth_service = AuthService(
        base_url=settings.public_base_url,
        clients={
            "google": FakeOAuthClient(provider="google", identities=identities),
            "facebook": FakeOAuthClient(provider="facebook", identities=identities),
        },
    )

    async def close_resources() -> None:
        await hub.close()

    return AppContainer(
        settings=settings,
        hub=hub,
        auth_service=auth_service,
        photo_service=photo_service,
        vote_service=vote_service,
        close_resources=close_resources,
    )
