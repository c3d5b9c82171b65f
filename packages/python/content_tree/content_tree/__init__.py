"""Content tree: categories, topics and content items in a path-addressed store."""

from .config import ContentTreeSettings, settings
from .deleter import DeleteOutcome, DeleteState, SubtreeDeleter
from .errors import (
    ContentTreeError,
    NodeNotFoundError,
    NodeValidationError,
    PartialTreeError,
    StoreError,
)
from .loader import TreeLoader
from .memory import InMemoryNodeRepository
from .models import (
    CategoryNode,
    ContentItemNode,
    ContentNode,
    ContentStats,
    NodeCreate,
    NodeUpdate,
    TopicNode,
)
from .paths import CategoryRef, ContentRef, NodeKind, NodeRef, PathCodec, TopicRef
from .repository import MongoNodeRepository, NodeRepository, StoredDocument
from .service import ContentTreeService, count_nodes
from .slugs import generate_unique_id, slugify

__all__ = [
    "ContentTreeSettings",
    "settings",
    "DeleteOutcome",
    "DeleteState",
    "SubtreeDeleter",
    "ContentTreeError",
    "NodeNotFoundError",
    "NodeValidationError",
    "PartialTreeError",
    "StoreError",
    "TreeLoader",
    "InMemoryNodeRepository",
    "CategoryNode",
    "ContentItemNode",
    "ContentNode",
    "ContentStats",
    "NodeCreate",
    "NodeUpdate",
    "TopicNode",
    "CategoryRef",
    "ContentRef",
    "NodeKind",
    "NodeRef",
    "PathCodec",
    "TopicRef",
    "MongoNodeRepository",
    "NodeRepository",
    "StoredDocument",
    "ContentTreeService",
    "count_nodes",
    "generate_unique_id",
    "slugify",
]
