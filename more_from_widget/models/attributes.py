"""Typed attributes for the ``gb/more-from-widget`` block."""

from __future__ import annotations

import copy
import math
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

BLOCK_NAME = "gb/more-from-widget"
DEFAULT_TITLE = "More From"
DEFAULT_POSTS_TO_SHOW = 3
DEFAULT_COLUMNS = 3
# Category ids are stored as signed 64-bit integers.
CATEGORY_ID_MIN = -(2**63)
CATEGORY_ID_MAX = 2**63 - 1

# Attribute declaration handed to the host block registry.
ATTRIBUTE_SCHEMA: dict[str, dict[str, Any]] = {
    "title": {"type": "string", "default": DEFAULT_TITLE},
    "category": {"type": "string", "default": ""},
    "postsToShow": {"type": "number", "default": DEFAULT_POSTS_TO_SHOW},
    "displayPostDate": {"type": "boolean", "default": False},
    "layout": {"type": "string", "default": "list"},
    "columns": {"type": "number", "default": DEFAULT_COLUMNS},
    "displayPostThumbnail": {"type": "boolean", "default": False},
}

# Numeric strings as the host understands them: optional sign, decimals,
# exponent, surrounding whitespace.
_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


class WidgetError(RuntimeError):
    """Base class for widget-level errors."""


class InvalidAttributeError(WidgetError):
    """Raised when a block attribute cannot be used for rendering."""


class BlockAttributes(BaseModel):
    """Immutable attribute set for one render call.

    Accepts the camelCase names stored by the block editor as well as the
    snake_case field names.
    """

    title: str | None = DEFAULT_TITLE
    category: str | int | float | None = ""
    posts_to_show: int = Field(default=DEFAULT_POSTS_TO_SHOW, ge=0)
    display_post_date: bool = False
    layout: str | None = "list"
    columns: int | None = DEFAULT_COLUMNS
    display_post_thumbnail: bool = False

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    @field_validator("category", mode="before")
    @classmethod
    def _reject_boolean_category(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("category must be a numeric string")
        return value

    @property
    def is_grid(self) -> bool:
        return self.layout == "grid"

    @property
    def list_class(self) -> str:
        layout_class = "is-grid" if self.is_grid else "is-list"
        columns = DEFAULT_COLUMNS if self.columns is None else self.columns
        return f"{layout_class} columns-{columns}"


def block_attribute_schema() -> dict[str, dict[str, Any]]:
    """Return a copy of the attribute schema safe for the caller to mutate."""
    return copy.deepcopy(ATTRIBUTE_SCHEMA)


def is_empty(value: Any) -> bool:
    """Host emptiness: ``None``, ``False``, ``0``, ``""`` and ``"0"``."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == "" or value == "0"
    if isinstance(value, (int, float)):
        return value == 0
    return False


def is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return value == value and value not in (float("inf"), float("-inf"))
    if isinstance(value, str):
        return bool(_NUMERIC_RE.match(value))
    return False


def parse_category_id(value: Any) -> int:
    """Return the integer category id for ``value`` or raise ``InvalidAttributeError``."""
    if is_empty(value):
        raise InvalidAttributeError("Category is empty.")
    if not is_numeric(value):
        raise InvalidAttributeError(f"Category {value!r} is not numeric.")
    if isinstance(value, str):
        text = value.strip()
        try:
            number = int(text)
        except ValueError:
            as_float = float(text)
            if not math.isfinite(as_float):
                raise InvalidAttributeError(f"Category {value!r} is not finite.") from None
            number = int(as_float)
    else:
        number = int(value)
    if not CATEGORY_ID_MIN <= number <= CATEGORY_ID_MAX:
        raise InvalidAttributeError(f"Category {value!r} is out of range.")
    return number


__all__ = [
    "ATTRIBUTE_SCHEMA",
    "BLOCK_NAME",
    "BlockAttributes",
    "CATEGORY_ID_MAX",
    "CATEGORY_ID_MIN",
    "DEFAULT_COLUMNS",
    "DEFAULT_POSTS_TO_SHOW",
    "DEFAULT_TITLE",
    "InvalidAttributeError",
    "WidgetError",
    "block_attribute_schema",
    "is_empty",
    "is_numeric",
    "parse_category_id",
]
