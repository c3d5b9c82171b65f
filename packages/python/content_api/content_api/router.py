"""FastAPI router exposing content tree operations."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from loguru import logger
from pydantic import BaseModel, Field

from content_tree import (
    CategoryNode,
    ContentStats,
    ContentTreeService,
    NodeCreate,
    NodeNotFoundError,
    NodeUpdate,
    NodeValidationError,
    StoreError,
)

from .dependencies import get_content_service

router = APIRouter(prefix="/content", tags=["content"])


class CreatedNode(BaseModel):
    id: str


class CreateChildPayload(BaseModel):
    parent_id: str
    # Child collection path of the parent; empty means "below root category parent_id".
    parent_path: List[str] = Field(default_factory=list)
    data: NodeCreate


class UpdateNodePayload(BaseModel):
    path: Optional[List[str]] = None
    patch: NodeUpdate


@contextmanager
def _operation(name: str) -> Iterator[None]:
    """Translate content tree errors into HTTP responses."""

    try:
        yield
    except NodeValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except NodeNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except StoreError as exc:
        logger.exception("Content operation {name} failed", name=name)
        raise HTTPException(status_code=502, detail="Operation failed") from exc


@router.get("/tree", response_model=list[CategoryNode])
async def get_tree(service: ContentTreeService = Depends(get_content_service)):
    """Return the full category → topic → content forest."""

    with _operation("get_tree"):
        return await service.get_content_tree()


@router.get("/stats", response_model=ContentStats)
async def get_stats(service: ContentTreeService = Depends(get_content_service)):
    """Return category/topic/content counts for the current tree."""

    with _operation("get_stats"):
        return await service.get_content_stats()


@router.post("/categories", response_model=CreatedNode, status_code=201)
async def create_category(
    payload: NodeCreate,
    service: ContentTreeService = Depends(get_content_service),
):
    """Create a root category; the id is derived from its title."""

    with _operation("create_category"):
        node_id = await service.create_root_category(payload)
    return CreatedNode(id=node_id)


@router.post("/children", response_model=CreatedNode, status_code=201)
async def create_child(
    payload: CreateChildPayload,
    service: ContentTreeService = Depends(get_content_service),
):
    """Create a topic below a category or a content item below a topic."""

    with _operation("create_child"):
        node_id = await service.create_child(payload.parent_id, payload.data, payload.parent_path)
    return CreatedNode(id=node_id)


@router.patch("/nodes/{node_id}", status_code=204)
async def update_node(
    node_id: str,
    payload: UpdateNodePayload,
    service: ContentTreeService = Depends(get_content_service),
) -> Response:
    """Update a node's title, content, icon or color."""

    with _operation("update_node"):
        await service.update_node(node_id, payload.patch, payload.path)
    return Response(status_code=204)


@router.delete("/nodes/{node_id}", status_code=204)
async def delete_node(
    node_id: str,
    path: Optional[List[str]] = Query(default=None),
    service: ContentTreeService = Depends(get_content_service),
) -> Response:
    """Delete a node and its subtree."""

    with _operation("delete_node"):
        await service.delete_node(node_id, path)
    return Response(status_code=204)
