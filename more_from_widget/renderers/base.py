"""Renderer interfaces and the view model handed to them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(slots=True)
class RenderOptions:
    escape_title: bool = False


@dataclass(frozen=True, slots=True)
class PostEntry:
    """One list entry; URLs are raw and are sanitised by the renderer."""

    permalink: str
    title: str
    thumbnail_url: str | None = None
    date_iso: str | None = None
    date_display: str | None = None


@dataclass(frozen=True, slots=True)
class MoreFromView:
    list_class: str
    title: str | None = None
    entries: tuple[PostEntry, ...] = field(default_factory=tuple)


class Renderer(Protocol):
    def render(
        self,
        view: MoreFromView,
        *,
        options: RenderOptions | None = None,
    ) -> str:
        ...


__all__ = ["MoreFromView", "PostEntry", "RenderOptions", "Renderer"]
