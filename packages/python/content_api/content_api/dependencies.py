"""FastAPI dependency providing the shared content tree service."""

from __future__ import annotations

from functools import lru_cache

from loguru import logger

from content_tree import ContentTreeService, InMemoryNodeRepository, MongoNodeRepository

from .config import settings


@lru_cache
def get_content_service() -> ContentTreeService:
    """Build the service once per process for the configured store backend."""

    backend = settings.store_backend
    if backend == "memory":
        repository = InMemoryNodeRepository()
    elif backend == "mongo":
        repository = MongoNodeRepository()
    else:
        raise ValueError(f"Unknown CONTENT_STORE_BACKEND {backend!r}")
    logger.info("Content service using {backend} store", backend=backend)
    return ContentTreeService(repository)
