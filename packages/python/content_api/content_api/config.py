"""Configuration for the content API package."""

import os

from pydantic import BaseModel, Field


class ContentApiSettings(BaseModel):
    """Selects the document store behind the content service."""

    # "mongo" for the Motor-backed store, "memory" for a process-local one.
    store_backend: str = Field(
        default_factory=lambda: os.getenv("CONTENT_STORE_BACKEND", "mongo").lower()
    )


settings = ContentApiSettings()
