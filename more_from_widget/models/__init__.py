"""Typed models for block attributes and host content."""

from .attributes import (
    ATTRIBUTE_SCHEMA,
    BLOCK_NAME,
    BlockAttributes,
    InvalidAttributeError,
    WidgetError,
    block_attribute_schema,
    parse_category_id,
)
from .content import ContentItem, PostStatus

__all__ = [
    "ATTRIBUTE_SCHEMA",
    "BLOCK_NAME",
    "BlockAttributes",
    "ContentItem",
    "InvalidAttributeError",
    "PostStatus",
    "WidgetError",
    "block_attribute_schema",
    "parse_category_id",
]
