"""Path-addressed document storage consumed by the content tree.

Every node is one document addressed by its segment path. The Mongo
implementation keeps all nodes in a single collection keyed by the joined
path, with the parent collection path stored alongside for listing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence

from loguru import logger
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from db_core import MongoDocument, get_collection

from .config import ContentTreeSettings, settings
from .errors import NodeNotFoundError, StoreError

_PATH_SEPARATOR = "/"
_RESERVED_FIELDS = ("_id", "collection")


@dataclass
class StoredDocument:
    """A document returned by :meth:`NodeRepository.list`."""

    id: str
    path: tuple
    data: Dict[str, Any] = field(default_factory=dict)


class NodeRepository(Protocol):
    """Operations the content tree needs from a document store."""

    async def get(self, path: Sequence[str]) -> Optional[Dict[str, Any]]:
        """Return the document at ``path`` or None when absent."""

    async def set(self, path: Sequence[str], data: Dict[str, Any]) -> None:
        """Create or replace the document at ``path``."""

    async def update(self, path: Sequence[str], patch: Dict[str, Any]) -> None:
        """Merge ``patch`` into an existing document; raise NodeNotFoundError if absent."""

    async def delete(self, path: Sequence[str]) -> None:
        """Delete the document at ``path``; deleting an absent document is a no-op."""

    async def list(
        self, collection_path: Sequence[str], order_by: Optional[str] = None
    ) -> List[StoredDocument]:
        """List the documents directly inside ``collection_path``."""


def join_path(segments: Sequence[str]) -> str:
    return _PATH_SEPARATOR.join(segments)


def _strip_reserved(doc: MongoDocument) -> Dict[str, Any]:
    return {key: value for key, value in doc.items() if key not in _RESERVED_FIELDS}


class MongoNodeRepository:
    """Motor-backed :class:`NodeRepository`."""

    def __init__(self, collection=None, config: Optional[ContentTreeSettings] = None):
        config = config or settings
        self._collection = collection
        self._collection_name = config.nodes_collection

    @property
    def collection(self):
        if self._collection is None:
            self._collection = get_collection(self._collection_name)
        return self._collection

    async def get(self, path: Sequence[str]) -> Optional[Dict[str, Any]]:
        key = join_path(path)
        try:
            doc = await self.collection.find_one({"_id": key})
        except PyMongoError as exc:
            raise StoreError(f"Failed to read {key}: {exc}") from exc
        if doc is None:
            return None
        return _strip_reserved(doc)

    async def set(self, path: Sequence[str], data: Dict[str, Any]) -> None:
        key = join_path(path)
        record = dict(_strip_reserved(data))
        record["_id"] = key
        record["collection"] = join_path(tuple(path)[:-1])
        try:
            await self.collection.replace_one({"_id": key}, record, upsert=True)
        except PyMongoError as exc:
            raise StoreError(f"Failed to write {key}: {exc}") from exc
        logger.debug("Stored document {key}", key=key)

    async def update(self, path: Sequence[str], patch: Dict[str, Any]) -> None:
        key = join_path(path)
        try:
            result = await self.collection.update_one(
                {"_id": key},
                {"$set": _strip_reserved(patch)},
            )
        except PyMongoError as exc:
            raise StoreError(f"Failed to update {key}: {exc}") from exc
        if result.matched_count == 0:
            raise NodeNotFoundError(f"Document {key} does not exist")

    async def delete(self, path: Sequence[str]) -> None:
        key = join_path(path)
        try:
            await self.collection.delete_one({"_id": key})
        except PyMongoError as exc:
            raise StoreError(f"Failed to delete {key}: {exc}") from exc

    async def list(
        self, collection_path: Sequence[str], order_by: Optional[str] = None
    ) -> List[StoredDocument]:
        parent = tuple(collection_path)
        key = join_path(parent)
        try:
            cursor = self.collection.find({"collection": key})
            if order_by:
                cursor = cursor.sort(order_by, ASCENDING)
            docs = [doc async for doc in cursor]
        except PyMongoError as exc:
            raise StoreError(f"Failed to list {key}: {exc}") from exc

        result = []
        for doc in docs:
            node_id = str(doc["_id"]).rsplit(_PATH_SEPARATOR, 1)[-1]
            result.append(
                StoredDocument(id=node_id, path=parent + (node_id,), data=_strip_reserved(doc))
            )
        return result
