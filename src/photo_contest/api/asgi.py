"""ASGI entrypoint for the photo contest API."""

from photo_contest.api.app import create_app
from photo_contest.containers import build_container

app = create_app(build_container())
