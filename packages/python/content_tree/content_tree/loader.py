"""Assemble the category → topic → content forest from the store."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Sequence, Union

from loguru import logger

from .errors import PartialTreeError, StoreError
from .models import CategoryNode, ContentItemNode, TopicNode
from .paths import CategoryRef, NodeRef, ParentRef, PathCodec, TopicRef, child_ref
from .repository import NodeRepository, StoredDocument

ORDER_FIELD = "order"

LoadedNode = Union[CategoryNode, TopicNode, ContentItemNode]


def _coerce_order(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def build_node(ref: NodeRef, path: Sequence[str], data: Dict[str, Any]) -> LoadedNode:
    """Turn a stored document into the node model matching ``ref``'s kind."""

    fields = {
        "id": ref.id,
        "title": data.get("title") or ref.id,
        "icon": data.get("icon"),
        "color_hex": data.get("colorHex"),
        "order": _coerce_order(data.get(ORDER_FIELD)),
        "path": list(path),
    }
    if isinstance(ref, CategoryRef):
        return CategoryNode(**fields)
    if isinstance(ref, TopicRef):
        return TopicNode(parent_id=ref.category_id, **fields)
    return ContentItemNode(parent_id=ref.topic_id, content=data.get("content") or "", **fields)


class TreeLoader:
    """Reads the tree level by level, one list call per node."""

    def __init__(self, repository: NodeRepository, codec: PathCodec):
        self.repository = repository
        self.codec = codec

    async def _list_ordered(self, collection_path: Sequence[str]) -> List[StoredDocument]:
        try:
            return await self.repository.list(collection_path, order_by=ORDER_FIELD)
        except StoreError as exc:
            logger.warning(
                "Ordered read of {collection} failed, using unordered results: {error}",
                collection="/".join(collection_path),
                error=exc,
            )
            return await self.repository.list(collection_path)

    async def load_roots(self) -> List[CategoryNode]:
        """Return the root categories ordered by ``order``."""

        docs = await self._list_ordered(self.codec.root_path())
        categories = [build_node(CategoryRef(doc.id), doc.path, doc.data) for doc in docs]
        logger.debug("Loaded {count} root categories", count=len(categories))
        return categories  # type: ignore[return-value]

    async def load_children(self, parent: ParentRef) -> List[Union[TopicNode, ContentItemNode]]:
        """Return the direct children of a category or topic."""

        collection_path = self.codec.children_of(parent)
        docs = await self._list_ordered(collection_path)
        children = []
        for doc in docs:
            ref = child_ref(parent, doc.id)
            children.append(build_node(ref, self.codec.encode(ref), doc.data))
        return children  # type: ignore[return-value]

    async def _attach_children(self, node: Union[CategoryNode, TopicNode]) -> None:
        ref = self.codec.decode(node.path)
        try:
            children = await self.load_children(ref)  # type: ignore[arg-type]
        except StoreError as exc:
            failure = PartialTreeError(node.path, exc)
            logger.warning("Returning {node} without children: {error}", node=node.id, error=failure)
            node.children = None
            return

        node.children = children
        topics = [child for child in children if isinstance(child, TopicNode)]
        if topics:
            await asyncio.gather(*(self._attach_children(topic) for topic in topics))

    async def load_tree(self) -> List[CategoryNode]:
        """Load every category with its topics and their content items.

        A node whose child collection cannot be read keeps ``children=None``
        instead of failing the whole tree.
        """

        roots = await self.load_roots()
        await asyncio.gather(*(self._attach_children(root) for root in roots))
        logger.info("Content tree loaded with {count} categories", count=len(roots))
        return roots
