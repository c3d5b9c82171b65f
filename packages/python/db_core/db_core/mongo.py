"""Async MongoDB helpers built on top of Motor.

Only generic utilities live here; the content repository imports these helpers
and builds its path-addressed storage on top."""

from functools import lru_cache
from typing import Any

from loguru import logger
from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)

from .settings import settings


@lru_cache
def get_mongo_client() -> AsyncIOMotorClient:
    """Return a cached Motor client configured via ``db_core.settings``.

    Server selection gives up after ``settings.timeout_ms`` so an unreachable
    database surfaces as an error instead of hanging the request.
    """

    logger.debug("Creating Motor client for {db}", db=settings.db_name)
    return AsyncIOMotorClient(settings.uri, serverSelectionTimeoutMS=settings.timeout_ms)


def get_db() -> AsyncIOMotorDatabase:
    """Return the main application database defined by ``settings.db_name``."""

    client = get_mongo_client()
    return client[settings.db_name]


def get_collection(name: str) -> AsyncIOMotorCollection:
    return get_db()[name]


def close_mongo_client() -> None:
    """Close the cached client; the next ``get_db`` call opens a new one."""

    if get_mongo_client.cache_info().currsize:
        get_mongo_client().close()
        get_mongo_client.cache_clear()


async def ping() -> dict[str, Any]:
    """Run a simple ``ping`` command against the configured MongoDB server."""

    await get_db().command("ping")
    return {"ok": True}
