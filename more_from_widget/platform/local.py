"""In-process reference host backed by the SQL post repository."""

from __future__ import annotations

import hashlib
import hmac
import logging
import math
import re
import time
from typing import Any, Callable, Mapping, Sequence

from more_from_widget.config import WidgetSettings
from more_from_widget.models.content import ContentItem
from more_from_widget.platform.base import (
    ISO_8601,
    AssetSpec,
    BlockRegistrationError,
    BlockTypeSpec,
    PlatformError,
)
from more_from_widget.repositories.filters import ContentQuery
from more_from_widget.repositories.post_repository import PostRepository

logger = logging.getLogger(__name__)

_BLOCK_NAME_RE = re.compile(r"^[a-z0-9-]+/[a-z0-9-]+$")


class LocalPlatform:
    """Host implementation that keeps asset queues and block types in memory."""

    def __init__(
        self,
        repository: PostRepository,
        settings: WidgetSettings | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ):
        self._repository = repository
        self._settings = settings or WidgetSettings()
        self._clock = clock
        self._scripts: dict[str, AssetSpec] = {}
        self._styles: dict[str, AssetSpec] = {}
        self._script_data: dict[str, dict[str, dict[str, Any]]] = {}
        self._block_types: dict[str, BlockTypeSpec] = {}

    @property
    def repository(self) -> PostRepository:
        return self._repository

    @property
    def settings(self) -> WidgetSettings:
        return self._settings

    # ----------------------------------------------------------------- Assets
    @property
    def scripts(self) -> dict[str, AssetSpec]:
        return dict(self._scripts)

    @property
    def styles(self) -> dict[str, AssetSpec]:
        return dict(self._styles)

    def script_data(self, handle: str) -> dict[str, dict[str, Any]]:
        return dict(self._script_data.get(handle, {}))

    def enqueue_script(
        self,
        handle: str,
        url: str,
        deps: Sequence[str] = (),
        version: str | None = None,
    ) -> None:
        if handle in self._scripts:
            return
        self._scripts[handle] = AssetSpec(handle=handle, url=url, deps=tuple(deps), version=version)

    def enqueue_style(
        self,
        handle: str,
        url: str,
        deps: Sequence[str] = (),
        version: str | None = None,
    ) -> None:
        if handle in self._styles:
            return
        self._styles[handle] = AssetSpec(handle=handle, url=url, deps=tuple(deps), version=version)

    def inject_script_data(self, handle: str, key: str, data: Mapping[str, Any]) -> None:
        if handle not in self._scripts:
            raise PlatformError(f"Script {handle!r} must be enqueued before data is attached.")
        self._script_data.setdefault(handle, {})[key] = dict(data)

    def reset_assets(self) -> None:
        """Forget enqueued assets, as at the start of a new page load."""
        self._scripts.clear()
        self._styles.clear()
        self._script_data.clear()

    # ------------------------------------------------------------- Block types
    @property
    def block_types(self) -> dict[str, BlockTypeSpec]:
        return dict(self._block_types)

    def register_block_type(self, name: str, spec: BlockTypeSpec) -> None:
        if not _BLOCK_NAME_RE.match(name):
            raise BlockRegistrationError(
                f"Block name {name!r} must be 'namespace/name' in lowercase."
            )
        if name in self._block_types:
            raise BlockRegistrationError(f"Block type {name!r} is already registered.")
        self._block_types[name] = spec
        logger.debug("Registered block type %s", name)

    def render_block(self, name: str, attributes: Mapping[str, Any] | None = None) -> str:
        """Render a registered block after filling in schema defaults."""
        spec = self._block_types.get(name)
        if spec is None:
            raise PlatformError(f"Block type {name!r} is not registered.")
        prepared = {
            key: definition["default"]
            for key, definition in spec.attributes.items()
            if "default" in definition
        }
        prepared.update(attributes or {})
        return spec.render_callback(prepared) or ""

    # ----------------------------------------------------------------- Content
    def query_content(self, query: ContentQuery) -> list[ContentItem]:
        return self._repository.query_posts(query)

    def get_permalink(self, post_id: int) -> str:
        post = self._repository.get_post(post_id)
        return post.permalink if post else ""

    def get_title(self, post_id: int) -> str:
        post = self._repository.get_post(post_id)
        return post.title if post else ""

    def get_thumbnail_url(self, post_id: int) -> str | None:
        post = self._repository.get_post(post_id)
        return post.thumbnail_url if post else None

    def get_date(self, post_id: int, date_format: str = "") -> str:
        """Format the publish date; ``"c"`` is ISO 8601, ``""`` the site format."""
        post = self._repository.get_post(post_id)
        if post is None:
            return ""
        if date_format == ISO_8601:
            return post.published_at.isoformat()
        return post.published_at.strftime(date_format or self._settings.date_format)

    # ------------------------------------------------------------ URLs/nonces
    def admin_url(self, path: str = "") -> str:
        return f"{self._settings.site_url.rstrip('/')}/wp-admin/{path.lstrip('/')}"

    def plugins_url(self, path: str = "") -> str:
        return f"{self._settings.plugin_url.rstrip('/')}/{path.lstrip('/')}"

    def create_nonce(self, action: str) -> str:
        return self._nonce_for(action, self._nonce_tick())

    def verify_nonce(self, nonce: str, action: str) -> bool:
        """Accept nonces from the current or the previous half-lifetime tick."""
        tick = self._nonce_tick()
        return any(
            hmac.compare_digest(nonce, self._nonce_for(action, candidate))
            for candidate in (tick, tick - 1)
        )

    def _nonce_tick(self) -> int:
        return math.ceil(self._clock() / (self._settings.nonce_lifetime / 2))

    def _nonce_for(self, action: str, tick: int) -> str:
        digest = hmac.new(
            self._settings.nonce_secret.encode("utf-8"),
            f"{tick}|{action}".encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()
        return digest[-12:-2]


__all__ = ["LocalPlatform"]
