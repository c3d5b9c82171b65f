"""Create, read, update and delete operations over the content tree."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Union

from loguru import logger

from .config import ContentTreeSettings, settings
from .deleter import SubtreeDeleter
from .errors import NodeNotFoundError, NodeValidationError
from .loader import TreeLoader
from .models import CategoryNode, ContentItemNode, ContentStats, NodeCreate, NodeUpdate, TopicNode
from .paths import (
    CATEGORY_PATH_LENGTH,
    CONTENT_PATH_LENGTH,
    TOPIC_PATH_LENGTH,
    CategoryRef,
    ContentRef,
    NodeRef,
    ParentRef,
    PathCodec,
    validate_id,
)
from .repository import NodeRepository
from .slugs import generate_unique_id

AnyNode = Union[CategoryNode, TopicNode, ContentItemNode]


def count_nodes(nodes: Iterable[AnyNode]) -> ContentStats:
    """Classify every node of an assembled tree and sum them up.

    Category: path of length 2. Content: non-empty ``content``. Topic: neither.
    """

    stats = ContentStats(last_updated=datetime.now(timezone.utc))
    pending: List[AnyNode] = list(nodes)
    while pending:
        node = pending.pop()
        if len(node.path) == CATEGORY_PATH_LENGTH:
            stats.total_categories += 1
        elif getattr(node, "content", None):
            stats.total_content += 1
        else:
            stats.total_topics += 1
        pending.extend(getattr(node, "children", None) or [])
    return stats


class ContentTreeService:
    """Entry point used by the HTTP layer and other collaborators.

    The service keeps no cached copy of the tree; every read goes to the
    injected repository.
    """

    def __init__(
        self,
        repository: NodeRepository,
        config: Optional[ContentTreeSettings] = None,
    ):
        self.config = config or settings
        self.repository = repository
        self.codec = PathCodec.from_settings(self.config)
        self.loader = TreeLoader(repository, self.codec)
        self.deleter = SubtreeDeleter(repository, self.codec)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_content_tree(self) -> List[CategoryNode]:
        return await self.loader.load_tree()

    async def get_root_categories(self) -> List[CategoryNode]:
        return await self.loader.load_roots()

    async def get_children(self, parent_path: Sequence[str]) -> List[Union[TopicNode, ContentItemNode]]:
        """Return one level of children below the category or topic at ``parent_path``."""

        parent = self.codec.decode(parent_path)
        if isinstance(parent, ContentRef):
            raise NodeValidationError("Content nodes cannot have children")
        return await self.loader.load_children(parent)  # type: ignore[arg-type]

    async def get_content_stats(self, tree: Optional[List[CategoryNode]] = None) -> ContentStats:
        if tree is None:
            tree = await self.get_content_tree()
        stats = count_nodes(tree)
        logger.debug(
            "Content stats: {categories} categories, {topics} topics, {content} content",
            categories=stats.total_categories,
            topics=stats.total_topics,
            content=stats.total_content,
        )
        return stats

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def _create(self, collection_path: Sequence[str], data: NodeCreate) -> str:
        node_id = await generate_unique_id(
            self.repository,
            data.title,
            collection_path,
            max_attempts=self.config.slug_max_attempts,
        )
        await self.repository.set(tuple(collection_path) + (node_id,), data.to_document())
        logger.info(
            "Created {node} in {collection}",
            node=node_id,
            collection="/".join(collection_path),
        )
        return node_id

    async def create_root_category(self, data: NodeCreate) -> str:
        """Create a category at ``[root, id]`` and return its generated id."""

        return await self._create(self.codec.root_path(), data)

    def resolve_parent(self, parent_id: str, parent_path: Optional[Sequence[str]]) -> ParentRef:
        """Resolve the child collection a new node goes into.

        ``parent_path`` is the child collection path: length 3 below a
        category, length 5 below a topic. Without one the parent is taken to be
        the root category ``parent_id``.
        """

        if not parent_path:
            return CategoryRef(validate_id(parent_id))
        parent = self.codec.decode_collection(parent_path)
        if parent is None:
            raise NodeValidationError("Use create_root_category for root level nodes")
        return parent

    async def create_child(
        self,
        parent_id: str,
        data: NodeCreate,
        parent_path: Optional[Sequence[str]] = None,
    ) -> str:
        parent = self.resolve_parent(parent_id, parent_path)
        return await self._create(self.codec.children_of(parent), data)

    def resolve_node(self, node_id: str, node_path: Optional[Sequence[str]]) -> NodeRef:
        if not node_path:
            return CategoryRef(validate_id(node_id))
        if len(node_path) not in (CATEGORY_PATH_LENGTH, TOPIC_PATH_LENGTH, CONTENT_PATH_LENGTH):
            raise NodeValidationError(
                f"Invalid node path length {len(node_path)}; expected 2, 4 or 6"
            )
        return self.codec.decode(node_path)

    async def update_node(
        self,
        node_id: str,
        patch: NodeUpdate,
        node_path: Optional[Sequence[str]] = None,
    ) -> None:
        """Apply a partial update of title/content/icon/colorHex in place."""

        ref = self.resolve_node(node_id, node_path)
        fields = patch.to_patch()
        if not fields:
            logger.debug("Empty patch for {node}, nothing to update", node=node_id)
            return
        path = self.codec.encode(ref)
        await self.repository.update(path, fields)
        logger.info(
            "Updated {node} at {path}: {fields}",
            node=node_id,
            path="/".join(path),
            fields=sorted(fields),
        )

    async def delete_node(
        self,
        node_id: str,
        path: Optional[Sequence[str]] = None,
        *,
        missing_ok: bool = True,
    ) -> None:
        """Delete a node with its subtree.

        A node that cannot be found by any strategy counts as already deleted
        unless ``missing_ok`` is False.
        """

        try:
            await self.deleter.delete(node_id, path)
        except NodeNotFoundError:
            if not missing_ok:
                raise
            logger.info("Node {node} already absent, nothing to delete", node=node_id)
