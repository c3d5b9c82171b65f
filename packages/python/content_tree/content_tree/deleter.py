"""Recursive subtree deletion with fallbacks for unreliable paths.

The store has no cascading delete and older records were written before the
UI tracked full paths, so the path handed to :meth:`SubtreeDeleter.delete`
may be missing, too short, or wrong. Deletion walks a fixed chain of
strategies and stops at the first one that succeeds:

    NORMALIZE -> PRIMARY_DELETE -> FALLBACK_ROOT -> FALLBACK_SEARCH -> FAILED
                       |                |                 |
                       +----------------+-----------------+--> DONE

Deletion is best-effort: a failure halfway through can leave some
descendants deleted while their ancestor survives.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from loguru import logger

from .errors import ContentTreeError, NodeNotFoundError, NodeValidationError
from .paths import (
    CONTENT_PATH_LENGTH,
    CATEGORY_PATH_LENGTH,
    TOPIC_PATH_LENGTH,
    CategoryRef,
    ContentRef,
    NodeRef,
    PathCodec,
    child_ref,
    validate_id,
)
from .repository import NodeRepository


class DeleteState(str, Enum):
    NORMALIZE = "normalize"
    PRIMARY_DELETE = "primary_delete"
    FALLBACK_ROOT = "fallback_root"
    FALLBACK_SEARCH = "fallback_search"
    FAILED = "failed"
    DONE = "done"


@dataclass
class DeleteOutcome:
    """Record of one delete run: visited states, errors and removed paths."""

    node_id: str
    requested_path: tuple
    target: Optional[NodeRef] = None
    transitions: List[DeleteState] = field(default_factory=list)
    errors: Dict[DeleteState, ContentTreeError] = field(default_factory=dict)
    deleted_paths: List[tuple] = field(default_factory=list)

    @property
    def state(self) -> Optional[DeleteState]:
        return self.transitions[-1] if self.transitions else None


class SubtreeDeleter:
    def __init__(self, repository: NodeRepository, codec: PathCodec):
        self.repository = repository
        self.codec = codec

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def _enter(self, outcome: DeleteOutcome, state: DeleteState) -> None:
        previous = outcome.state
        outcome.transitions.append(state)
        logger.debug(
            "Delete {node}: {previous} -> {state}",
            node=outcome.node_id,
            previous=previous.value if previous else "start",
            state=state.value,
        )

    def _fail_step(self, outcome: DeleteOutcome, state: DeleteState, error: ContentTreeError) -> None:
        outcome.errors[state] = error
        logger.warning(
            "Delete {node} failed in {state}: {error}",
            node=outcome.node_id,
            state=state.value,
            error=error,
        )

    def _finish(self, outcome: DeleteOutcome, target: NodeRef) -> DeleteOutcome:
        outcome.target = target
        self._enter(outcome, DeleteState.DONE)
        logger.info(
            "Deleted {node} at {path} ({count} documents)",
            node=outcome.node_id,
            path="/".join(self.codec.encode(target)),
            count=len(outcome.deleted_paths),
        )
        return outcome

    async def delete(self, node_id: str, path: Optional[Sequence[str]] = None) -> DeleteOutcome:
        """Delete ``node_id`` and its subtree.

        Raises the primary attempt's error when every fallback fails too.
        """

        validate_id(node_id)
        outcome = DeleteOutcome(node_id=node_id, requested_path=tuple(path or ()))

        self._enter(outcome, DeleteState.NORMALIZE)
        target = self.normalize(node_id, path)

        self._enter(outcome, DeleteState.PRIMARY_DELETE)
        try:
            await self._delete_existing(target, outcome)
            return self._finish(outcome, target)
        except ContentTreeError as exc:
            primary_error = exc
            self._fail_step(outcome, DeleteState.PRIMARY_DELETE, exc)

        root_ref = CategoryRef(node_id)
        if target != root_ref:
            self._enter(outcome, DeleteState.FALLBACK_ROOT)
            try:
                await self._delete_existing(root_ref, outcome)
                return self._finish(outcome, root_ref)
            except ContentTreeError as exc:
                self._fail_step(outcome, DeleteState.FALLBACK_ROOT, exc)

        self._enter(outcome, DeleteState.FALLBACK_SEARCH)
        try:
            match = await self.find_by_id(node_id)
            if match is None:
                raise NodeNotFoundError(f"Node {node_id} not found anywhere in the tree")
            await self._delete_subtree(match, outcome)
            return self._finish(outcome, match)
        except ContentTreeError as exc:
            self._fail_step(outcome, DeleteState.FALLBACK_SEARCH, exc)

        self._enter(outcome, DeleteState.FAILED)
        logger.error("Giving up deleting {node}: {error}", node=node_id, error=primary_error)
        raise primary_error

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def normalize(self, node_id: str, path: Optional[Sequence[str]]) -> NodeRef:
        """Resolve the caller's path, assuming a root category when unusable."""

        segments = tuple(path or ())
        if len(segments) in (CATEGORY_PATH_LENGTH, TOPIC_PATH_LENGTH, CONTENT_PATH_LENGTH):
            try:
                return self.codec.decode(segments)
            except NodeValidationError as exc:
                logger.warning(
                    "Unusable path {path} for {node}, assuming root category: {error}",
                    path="/".join(segments),
                    node=node_id,
                    error=exc,
                )
        elif segments:
            logger.warning(
                "Path of length {length} for {node}, assuming root category",
                length=len(segments),
                node=node_id,
            )
        return CategoryRef(node_id)

    async def _delete_existing(self, ref: NodeRef, outcome: DeleteOutcome) -> None:
        path = self.codec.encode(ref)
        if await self.repository.get(path) is None:
            raise NodeNotFoundError(f"No document at {'/'.join(path)}")
        await self._delete_subtree(ref, outcome)

    async def _delete_subtree(self, ref: NodeRef, outcome: DeleteOutcome) -> None:
        """Post-order: children first, then the node's own document."""

        if not isinstance(ref, ContentRef):
            children = await self.repository.list(self.codec.children_of(ref))
            if children:
                # Every sibling settles before the first failure is raised.
                results = await asyncio.gather(
                    *(self._delete_subtree(child_ref(ref, child.id), outcome) for child in children),
                    return_exceptions=True,
                )
                for result in results:
                    if isinstance(result, BaseException):
                        raise result
        path = self.codec.encode(ref)
        await self.repository.delete(path)
        outcome.deleted_paths.append(path)

    async def find_by_id(self, node_id: str) -> Optional[NodeRef]:
        """Breadth-first scan: categories, then topics, then content items."""

        level: List[NodeRef] = [
            CategoryRef(doc.id) for doc in await self.repository.list(self.codec.root_path())
        ]
        while level:
            for ref in level:
                if ref.id == node_id:
                    logger.info(
                        "Found {node} by search at {path}",
                        node=node_id,
                        path="/".join(self.codec.encode(ref)),
                    )
                    return ref
            next_level: List[NodeRef] = []
            for parent in level:
                if isinstance(parent, ContentRef):
                    continue
                docs = await self.repository.list(self.codec.children_of(parent))
                next_level.extend(child_ref(parent, doc.id) for doc in docs)
            level = next_level
        return None
