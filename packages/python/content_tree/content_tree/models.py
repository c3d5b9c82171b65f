"""Pydantic models describing content tree nodes."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _NodeBase(BaseModel):
    """Fields shared by every stored node."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    icon: Optional[str] = None
    color_hex: Optional[str] = Field(default=None, alias="colorHex")
    order: int = 0
    path: List[str]


class ContentItemNode(_NodeBase):
    """Leaf node carrying the actual learning content (HTML body)."""

    kind: Literal["content"] = "content"
    parent_id: str
    content: str = ""


class TopicNode(_NodeBase):
    kind: Literal["topic"] = "topic"
    parent_id: str
    # None until loaded, or when the child collection could not be read.
    children: Optional[List[ContentItemNode]] = None


class CategoryNode(_NodeBase):
    kind: Literal["category"] = "category"
    children: Optional[List[TopicNode]] = None


ContentNode = Annotated[
    Union[CategoryNode, TopicNode, ContentItemNode],
    Field(discriminator="kind"),
]


class NodeCreate(BaseModel):
    """Payload for creating a category, topic or content node."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    content: Optional[str] = None
    icon: Optional[str] = None
    color_hex: Optional[str] = Field(default=None, alias="colorHex")
    order: Optional[int] = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("title must not be blank")
        return value

    def to_document(self) -> Dict[str, Any]:
        """Return the stored representation, defaulting ``order`` to 0."""

        doc = self.model_dump(by_alias=True, exclude_none=True)
        doc["order"] = self.order or 0
        return doc


class NodeUpdate(BaseModel):
    """Partial update of a node's editable fields."""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    content: Optional[str] = None
    icon: Optional[str] = None
    color_hex: Optional[str] = Field(default=None, alias="colorHex")

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: Optional[str]) -> str:
        # Only runs when title is supplied; an explicit null is not a valid title.
        if value is None or not value.strip():
            raise ValueError("title must not be blank")
        return value

    def to_patch(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)


class ContentStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_categories: int = Field(default=0, alias="totalCategories")
    total_topics: int = Field(default=0, alias="totalTopics")
    total_content: int = Field(default=0, alias="totalContent")
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), alias="lastUpdated")
