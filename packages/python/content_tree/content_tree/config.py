"""Configuration for the content tree package."""

import os

from pydantic import BaseModel, Field


class ContentTreeSettings(BaseModel):
    """Collection names and limits used when addressing content nodes."""

    root_collection: str = Field(
        default_factory=lambda: os.getenv("CONTENT_ROOT_COLLECTION", "learning_data")
    )
    children_collection: str = Field(
        default_factory=lambda: os.getenv("CONTENT_CHILDREN_COLLECTION", "children")
    )
    # Mongo collection holding every node document, keyed by its joined path.
    nodes_collection: str = Field(
        default_factory=lambda: os.getenv("CONTENT_NODES_COLLECTION", "content_nodes")
    )
    slug_max_attempts: int = Field(
        default_factory=lambda: int(os.getenv("CONTENT_SLUG_MAX_ATTEMPTS", "100"))
    )


settings = ContentTreeSettings()
