"""Host platform contract consumed by the widget."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Protocol, Sequence

from more_from_widget.models.content import ContentItem
from more_from_widget.repositories.filters import ContentQuery

ISO_8601 = "c"

RenderCallback = Callable[[Mapping[str, Any]], str]


class PlatformError(RuntimeError):
    """Raised when the host rejects an operation."""


class BlockRegistrationError(PlatformError):
    """Raised when a block type cannot be registered."""


@dataclass(frozen=True, slots=True)
class AssetSpec:
    """A script or style as declared to the host asset pipeline."""

    handle: str
    url: str
    deps: tuple[str, ...] = ()
    version: str | None = None


@dataclass(frozen=True, slots=True)
class BlockTypeSpec:
    """Declaration of a server-rendered block type."""

    attributes: Mapping[str, Mapping[str, Any]]
    render_callback: RenderCallback


class Platform(Protocol):
    def enqueue_script(
        self,
        handle: str,
        url: str,
        deps: Sequence[str] = (),
        version: str | None = None,
    ) -> None:
        ...

    def enqueue_style(
        self,
        handle: str,
        url: str,
        deps: Sequence[str] = (),
        version: str | None = None,
    ) -> None:
        ...

    def inject_script_data(self, handle: str, key: str, data: Mapping[str, Any]) -> None:
        ...

    def register_block_type(self, name: str, spec: BlockTypeSpec) -> None:
        ...

    def query_content(self, query: ContentQuery) -> list[ContentItem]:
        ...

    def get_permalink(self, post_id: int) -> str:
        ...

    def get_title(self, post_id: int) -> str:
        ...

    def get_thumbnail_url(self, post_id: int) -> str | None:
        ...

    def get_date(self, post_id: int, date_format: str = "") -> str:
        ...

    def admin_url(self, path: str = "") -> str:
        ...

    def plugins_url(self, path: str = "") -> str:
        ...

    def create_nonce(self, action: str) -> str:
        ...


__all__ = [
    "AssetSpec",
    "BlockRegistrationError",
    "BlockTypeSpec",
    "ISO_8601",
    "Platform",
    "PlatformError",
    "RenderCallback",
]
