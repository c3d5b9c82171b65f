"""URL-safe identifiers derived from node titles."""

from __future__ import annotations

import re
import time
from typing import Callable, Sequence

from loguru import logger

from .repository import NodeRepository

DEFAULT_SLUG = "untitled"

_SPECIAL_CHARS = re.compile(r"[^\w\s-]", re.ASCII)
_SEPARATORS = re.compile(r"[\s_-]+")


def slugify(title: str) -> str:
    """Lowercase ``title`` and reduce it to hyphen-separated ``[a-z0-9]`` words.

    >>> slugify("  Linear Equations & Inequalities ")
    'linear-equations-inequalities'
    """

    slug = _SPECIAL_CHARS.sub("", title.lower().strip())
    slug = _SEPARATORS.sub("-", slug)
    return slug.strip("-")


async def generate_unique_id(
    repository: NodeRepository,
    title: str,
    sibling_path: Sequence[str],
    *,
    max_attempts: int = 100,
    clock: Callable[[], float] = time.time,
) -> str:
    """Return a slug for ``title`` that is free inside ``sibling_path``.

    Candidates are ``base``, ``base-1``, ``base-2`` and so on. After
    ``max_attempts`` occupied candidates the id falls back to
    ``base-<milliseconds>``. The check is not atomic: two concurrent callers
    can receive the same id.
    """

    base = slugify(title) or DEFAULT_SLUG
    collection = tuple(sibling_path)
    candidate = base
    for attempt in range(1, max_attempts + 1):
        if await repository.get(collection + (candidate,)) is None:
            logger.debug(
                "Generated unique id {slug} in {collection}",
                slug=candidate,
                collection="/".join(collection),
            )
            return candidate
        candidate = f"{base}-{attempt}"

    fallback = f"{base}-{int(clock() * 1000)}"
    logger.warning(
        "No free slug for {base} after {attempts} attempts, using {fallback}",
        base=base,
        attempts=max_attempts,
        fallback=fallback,
    )
    return fallback
