"""FastAPI application serving the content tree API."""

from __future__ import annotations

import os
import sys

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from dotenv import find_dotenv, load_dotenv
from pymongo.errors import PyMongoError

from ._paths import ensure_local_packages_importable

ensure_local_packages_importable()
load_dotenv(find_dotenv(usecwd=True))


def _configure_logging() -> None:
    level = os.getenv("LOG_LEVEL") or os.getenv("LOGURU_LEVEL") or "INFO"
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
    logger.info("Logger configured at {level} level", level=level.upper())


from .config import settings
from content_api import router as content_router
from content_api.config import settings as content_settings
from db_core import close_mongo_client, ping


_configure_logging()

app = FastAPI(title=settings.api_title, version=settings.api_version)

# Allow the admin front-end origins (with credentials) to talk to this API.
if settings.cors_allow_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
logger.info("CORS middleware added {origins}", origins=settings.cors_allow_origins)


@app.get("/health", tags=["health"])
async def health() -> dict[str, str]:
    """Simple liveness endpoint for load balancers and probes."""

    return {"status": "ok"}


@app.get("/health/db", tags=["health"])
async def health_db() -> dict[str, str]:
    """Check the Mongo connection when the content store is Mongo-backed."""

    if content_settings.store_backend != "mongo":
        return {"status": "ok", "store": content_settings.store_backend}
    try:
        await ping()
    except PyMongoError as exc:
        logger.warning("Mongo ping failed: {error}", error=exc)
        raise HTTPException(status_code=503, detail="Database unavailable") from exc
    return {"status": "ok", "store": "mongo"}


app.include_router(content_router)


@app.on_event("shutdown")
def _close_mongo_client() -> None:
    close_mongo_client()
    logger.info("Mongo client closed")

"""Run with:

    uvicorn core_server.main:app --host 0.0.0.0 --port 8000 --reload
"""
