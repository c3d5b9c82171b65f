"""Minimal MongoDB helpers shared across domain repositories.

Example usage in a domain repository:

    from db_core import get_collection

    async def list_nodes(collection_path: str):
        cursor = get_collection("content_nodes").find({"collection": collection_path})
        return await cursor.sort("order", 1).to_list(length=None)
"""

from .settings import MongoSettings, settings
from .mongo import close_mongo_client, get_collection, get_db, get_mongo_client, ping
from .typing import MongoDocument

__all__ = [
    "MongoSettings",
    "settings",
    "get_mongo_client",
    "get_db",
    "get_collection",
    "close_mongo_client",
    "ping",
    "MongoDocument",
]
