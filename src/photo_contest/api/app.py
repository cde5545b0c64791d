"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import (
    Depends,
    FastAPI,
    File,
    Request,
    UploadFile,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from fastapi.responses import JSONResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from photo_contest.adapters.local_image_store import PUBLIC_PREFIX
from photo_contest.api.auth import current_identity
from photo_contest.api.auth import router as auth_router
from photo_contest.api.models import VoteRequest
from photo_contest.app_logging import configure_logging
from photo_contest.containers import AppContainer
from photo_contest.domain.errors import ContestError
from photo_contest.domain.models import Identity
from photo_contest.domain.photos import PhotoRecord
from photo_contest.services.photos import ImageUpload

# Room for multipart boundaries and part headers around the image bytes.
MULTIPART_OVERHEAD = 64 * 1024


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    settings = container.settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Photo contest ready: providers=%s",
            ",".join(container.auth_service.providers()) or "none",
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        same_site="lax",
        https_only=settings.public_base_url.startswith("https://"),
    )
    settings.uploads_dir.mkdir(parents=True, exist_ok=True)
    app.mount(
        PUBLIC_PREFIX,
        StaticFiles(directory=settings.uploads_dir),
        name="uploads",
    )
    app.include_router(auth_router)

    @app.exception_handler(ContestError)
    async def contest_error_handler(
        request: Request, exc: ContestError
    ) -> JSONResponse:
        logger.info(
            "Request rejected: path=%s status=%s error=%s",
            request.url.path,
            exc.status_code,
            exc.message,
        )
        return JSONResponse(
            status_code=exc.status_code, content={"error": exc.message}
        )

    @app.middleware("http")
    async def reject_oversized_uploads(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.method == "POST" and request.url.path == "/upload":
            declared = request.headers.get("content-length", "")
            limit = container.photo_service.max_upload_bytes + MULTIPART_OVERHEAD
            if declared.isdigit() and int(declared) > limit:
                logger.info("Upload rejected before reading: bytes=%s", declared)
                return JSONResponse(
                    status_code=413,
                    content={"error": "Upload exceeds the size limit."},
                )
        return await call_next(request)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/photos")
    async def list_photos() -> list[dict[str, object]]:
        """Return every photo, oldest first."""
        return [_photo_view(photo) for photo in container.photo_service.list_photos()]

    @app.post("/upload")
    async def upload(
        request: Request,
        photo: UploadFile | None = File(default=None),
        identity: Identity | None = Depends(current_identity),
    ) -> Response:
        """Accept a single image and add it to the contest."""
        image = None
        if photo is not None:
            # One byte over the ceiling is enough to reject without reading it all.
            content = await photo.read(container.photo_service.max_upload_bytes + 1)
            image = ImageUpload(
                filename=photo.filename or "",
                content_type=photo.content_type or "",
                content=content,
            )
        record = await container.photo_service.upload_photo(identity, image)
        if "application/json" in request.headers.get("accept", ""):
            return JSONResponse(
                status_code=status.HTTP_201_CREATED, content=_photo_view(record)
            )
        return RedirectResponse(
            settings.post_login_redirect, status_code=status.HTTP_303_SEE_OTHER
        )

    @app.delete("/photos/{photo_id}")
    async def delete_photo(
        photo_id: str,
        identity: Identity | None = Depends(current_identity),
    ) -> dict[str, bool]:
        """Delete a photo the caller uploaded."""
        await container.photo_service.delete_photo(photo_id, identity)
        return {"ok": True}

    @app.get("/votes")
    async def votes(
        identity: Identity | None = Depends(current_identity),
    ) -> dict[str, dict[str, object]]:
        """Return every tally with the caller's voted flag."""
        summary = container.vote_service.get_vote_summary(identity)
        return {photo_id: item.as_dict() for photo_id, item in summary.items()}

    @app.post("/vote")
    async def vote(
        payload: VoteRequest | None = None,
        identity: Identity | None = Depends(current_identity),
    ) -> dict[str, object]:
        """Toggle the caller's vote for a photo."""
        photo_id = payload.photo_id if payload else None
        summary = await container.vote_service.toggle_vote(photo_id, identity)
        return summary.as_dict()

    @app.websocket("/ws")
    async def viewer_socket(websocket: WebSocket) -> None:
        """Keep a viewer subscribed to ledger events until it disconnects."""
        await container.hub.connect(websocket)
        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            container.hub.disconnect(websocket)

    return app


def _photo_view(photo: PhotoRecord) -> dict[str, object]:
    """Public view of a photo; the uploader's subject id stays private."""
    view: dict[str, object] = {"id": photo.id, "src": photo.src}
    if photo.uploader is not None:
        view["uploader"] = {
            "provider": photo.uploader.provider,
            "name": photo.uploader.name,
        }
    return view
