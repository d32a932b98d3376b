"""Read-only content item snapshot supplied by the host."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PostStatus(str, Enum):
    PUBLISH = "publish"
    DRAFT = "draft"
    PRIVATE = "private"
    TRASH = "trash"


class ContentItem(BaseModel):
    """Immutable representation of a published post."""

    id: int
    title: str = ""
    permalink: str = ""
    published_at: datetime
    thumbnail_url: str | None = None
    category_ids: tuple[int, ...] = Field(default_factory=tuple)
    sticky: bool = False
    status: PostStatus = PostStatus.PUBLISH

    model_config = ConfigDict(frozen=True)


__all__ = ["ContentItem", "PostStatus"]
