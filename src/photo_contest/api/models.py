"""Request models for the HTTP API."""

from pydantic import BaseModel


class VoteRequest(BaseModel):
    """Body of a vote toggle."""

    photo_id: str | None = None
