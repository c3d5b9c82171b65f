"""Expose the content tree FastAPI router."""

from .dependencies import get_content_service
from .router import router

__all__ = ["router", "get_content_service"]
