"""In-memory :class:`NodeRepository` for tests and local development."""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional, Sequence

from .errors import NodeNotFoundError
from .repository import StoredDocument


def _sort_key(value: Any) -> tuple:
    """Order mixed values the way MongoDB does: null, then numbers, then the rest."""

    if value is None:
        return (0, 0)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (1, value)
    return (2, str(value))


class InMemoryNodeRepository:
    """Keeps documents in a dict keyed by their segment path."""

    def __init__(self) -> None:
        self.documents: Dict[tuple, Dict[str, Any]] = {}

    async def get(self, path: Sequence[str]) -> Optional[Dict[str, Any]]:
        doc = self.documents.get(tuple(path))
        return copy.deepcopy(doc) if doc is not None else None

    async def set(self, path: Sequence[str], data: Dict[str, Any]) -> None:
        self.documents[tuple(path)] = copy.deepcopy(dict(data))

    async def update(self, path: Sequence[str], patch: Dict[str, Any]) -> None:
        key = tuple(path)
        if key not in self.documents:
            raise NodeNotFoundError(f"Document {'/'.join(key)} does not exist")
        self.documents[key].update(copy.deepcopy(patch))

    async def delete(self, path: Sequence[str]) -> None:
        self.documents.pop(tuple(path), None)

    async def list(
        self, collection_path: Sequence[str], order_by: Optional[str] = None
    ) -> List[StoredDocument]:
        parent = tuple(collection_path)
        docs = [
            StoredDocument(id=key[-1], path=key, data=copy.deepcopy(data))
            for key, data in self.documents.items()
            if len(key) == len(parent) + 1 and key[:-1] == parent
        ]
        if order_by:
            docs.sort(key=lambda doc: _sort_key(doc.data.get(order_by)))
        return docs
