"""Encode and decode the segment paths that address content nodes.

A node lives at an alternating collection/id path inside the document store:

    [root, category]                                   -> category
    [root, category, children, topic]                  -> topic
    [root, category, children, topic, children, item]  -> content

Callers work with :class:`NodeRef` values and only convert to raw segments at
the store boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

from .config import ContentTreeSettings, settings
from .errors import NodeValidationError

SegmentPath = Tuple[str, ...]

CATEGORY_PATH_LENGTH = 2
TOPIC_PATH_LENGTH = 4
CONTENT_PATH_LENGTH = 6


class NodeKind(str, Enum):
    CATEGORY = "category"
    TOPIC = "topic"
    CONTENT = "content"


@dataclass(frozen=True)
class CategoryRef:
    id: str

    kind = NodeKind.CATEGORY

    @property
    def parent(self) -> None:
        return None


@dataclass(frozen=True)
class TopicRef:
    category_id: str
    id: str

    kind = NodeKind.TOPIC

    @property
    def parent(self) -> CategoryRef:
        return CategoryRef(self.category_id)


@dataclass(frozen=True)
class ContentRef:
    category_id: str
    topic_id: str
    id: str

    kind = NodeKind.CONTENT

    @property
    def parent(self) -> TopicRef:
        return TopicRef(self.category_id, self.topic_id)


NodeRef = Union[CategoryRef, TopicRef, ContentRef]
ParentRef = Union[CategoryRef, TopicRef]


def validate_id(value: str) -> str:
    """Return ``value`` if it is usable as a single path segment."""

    if not isinstance(value, str) or not value.strip():
        raise NodeValidationError(f"Invalid node id {value!r}")
    if "/" in value:
        raise NodeValidationError(f"Node id {value!r} must not contain '/'")
    return value


def child_ref(parent: ParentRef, node_id: str) -> Union[TopicRef, ContentRef]:
    """Return the reference of ``node_id`` inside ``parent``'s child collection."""

    validate_id(node_id)
    if isinstance(parent, CategoryRef):
        return TopicRef(parent.id, node_id)
    if isinstance(parent, TopicRef):
        return ContentRef(parent.category_id, parent.id, node_id)
    raise NodeValidationError(f"{parent.kind.value} nodes cannot have children")


class PathCodec:
    """Translate between :class:`NodeRef` values and store segment paths."""

    def __init__(self, root_collection: str, children_collection: str):
        self.root_collection = root_collection
        self.children_collection = children_collection

    @classmethod
    def from_settings(cls, config: Optional[ContentTreeSettings] = None) -> "PathCodec":
        config = config or settings
        return cls(config.root_collection, config.children_collection)

    # ------------------------------------------------------------------
    # Document paths
    # ------------------------------------------------------------------

    def encode(self, ref: NodeRef) -> SegmentPath:
        if isinstance(ref, CategoryRef):
            return (self.root_collection, ref.id)
        if isinstance(ref, TopicRef):
            return (
                self.root_collection,
                ref.category_id,
                self.children_collection,
                ref.id,
            )
        if isinstance(ref, ContentRef):
            return (
                self.root_collection,
                ref.category_id,
                self.children_collection,
                ref.topic_id,
                self.children_collection,
                ref.id,
            )
        raise NodeValidationError(f"Unsupported node reference {ref!r}")

    def decode(self, segments: Sequence[str]) -> NodeRef:
        """Decode a document path of length 2, 4 or 6 into a node reference."""

        path = tuple(segments)
        if len(path) not in (CATEGORY_PATH_LENGTH, TOPIC_PATH_LENGTH, CONTENT_PATH_LENGTH):
            raise NodeValidationError(
                f"Invalid node path length {len(path)}; expected 2, 4 or 6"
            )
        self._check_collections(path)
        ids = [validate_id(segment) for segment in path[1::2]]
        if len(ids) == 1:
            return CategoryRef(*ids)
        if len(ids) == 2:
            return TopicRef(*ids)
        return ContentRef(*ids)

    def classify(self, segments: Sequence[str]) -> Optional[NodeKind]:
        """Return the node kind addressed by ``segments`` or None if unknown."""

        try:
            return self.decode(segments).kind
        except NodeValidationError:
            return None

    # ------------------------------------------------------------------
    # Collection paths
    # ------------------------------------------------------------------

    def root_path(self) -> SegmentPath:
        return (self.root_collection,)

    def children_of(self, ref: NodeRef) -> SegmentPath:
        """Path of the collection holding ``ref``'s children (length 3 or 5)."""

        if isinstance(ref, ContentRef):
            raise NodeValidationError("Content nodes cannot have children")
        return self.encode(ref) + (self.children_collection,)

    def collection_of(self, ref: NodeRef) -> SegmentPath:
        """Path of the collection ``ref`` itself lives in."""

        return self.encode(ref)[:-1]

    def decode_collection(self, segments: Sequence[str]) -> Optional[ParentRef]:
        """Resolve a collection path into the node that owns it.

        The root collection resolves to None; a length 3 path resolves to a
        category and a length 5 path to a topic.
        """

        path = tuple(segments)
        if path == self.root_path():
            return None
        if len(path) not in (CATEGORY_PATH_LENGTH + 1, TOPIC_PATH_LENGTH + 1):
            raise NodeValidationError(
                f"Invalid child collection path length {len(path)}; expected 3 or 5"
            )
        if path[-1] != self.children_collection:
            raise NodeValidationError(
                f"Child collection path must end with {self.children_collection!r}"
            )
        return self.decode(path[:-1])  # type: ignore[return-value]

    def _check_collections(self, path: SegmentPath) -> None:
        if path[0] != self.root_collection:
            raise NodeValidationError(
                f"Path must start with {self.root_collection!r}, got {path[0]!r}"
            )
        for segment in path[2::2]:
            if segment != self.children_collection:
                raise NodeValidationError(
                    f"Expected {self.children_collection!r} collection segment, got {segment!r}"
                )
