"""Block controller for the "More From" related-posts block."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from pydantic import ValidationError

from more_from_widget.assets import register_assets
from more_from_widget.config import WidgetSettings
from more_from_widget.models.attributes import (
    BLOCK_NAME,
    DEFAULT_POSTS_TO_SHOW,
    BlockAttributes,
    InvalidAttributeError,
    block_attribute_schema,
    parse_category_id,
)
from more_from_widget.models.content import ContentItem
from more_from_widget.platform.base import ISO_8601, BlockTypeSpec, Platform
from more_from_widget.renderers.base import MoreFromView, PostEntry, RenderOptions, Renderer
from more_from_widget.renderers.html import HtmlRenderer
from more_from_widget.repositories.filters import ContentQuery

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MoreFromWidget:
    """Registers the block with a host platform and renders it on request.

    The host calls :meth:`initialize` once at startup, then
    :meth:`enqueue_block_editor_assets` or :meth:`enqueue_block_assets` on
    each page load. Rendering goes through the callback bound in
    :meth:`register_block`.
    """

    platform: Platform
    settings: WidgetSettings = field(default_factory=WidgetSettings)
    renderer: Renderer = field(default_factory=HtmlRenderer)
    _initialized: bool = False

    # ------------------------------------------------------------ Registration
    def initialize(self) -> None:
        if self._initialized:
            return
        self.register_block()
        self._initialized = True

    def register_block(self) -> None:
        self.platform.register_block_type(
            BLOCK_NAME,
            BlockTypeSpec(attributes=block_attribute_schema(), render_callback=self.render),
        )

    def register_assets(self, for_editor: bool, post_id: int | None = None) -> None:
        register_assets(self.platform, self.settings, for_editor=for_editor, post_id=post_id)

    def enqueue_block_editor_assets(self, post_id: int | None = None) -> None:
        self.register_assets(True, post_id=post_id)

    def enqueue_block_assets(self) -> None:
        self.register_assets(False)

    # ----------------------------------------------------------------- Queries
    def query_related(
        self,
        category_id: Any,
        limit: int = DEFAULT_POSTS_TO_SHOW,
    ) -> list[ContentItem] | None:
        """Return up to ``limit`` posts in the category, or ``None``.

        ``None`` covers both an unusable category id and an empty result.
        Posts come back in the order the host returns them.
        """
        try:
            resolved_category = parse_category_id(category_id)
        except InvalidAttributeError as exc:
            logger.debug("Skipping related posts query: %s", exc)
            return None

        posts = self.platform.query_content(
            ContentQuery(
                category_id=resolved_category,
                limit=limit,
                ignore_sticky=True,
                suppress_filters=True,
            )
        )
        if not posts:
            logger.debug("No related posts in category %s", resolved_category)
            return None
        return list(posts)

    # --------------------------------------------------------------- Rendering
    def render(self, attributes: BlockAttributes | Mapping[str, Any]) -> str:
        """Render the block markup, or ``""`` when the category is unusable."""
        try:
            attrs = (
                attributes
                if isinstance(attributes, BlockAttributes)
                else BlockAttributes.model_validate(dict(attributes))
            )
            parse_category_id(attrs.category)
        except (ValidationError, InvalidAttributeError) as exc:
            logger.debug("Not rendering %s: %s", BLOCK_NAME, exc)
            return ""

        posts = self.query_related(attrs.category, attrs.posts_to_show) or []
        view = MoreFromView(
            list_class=attrs.list_class,
            title=attrs.title or None,
            entries=tuple(self._entry_for(post, attrs) for post in posts),
        )
        options = RenderOptions(escape_title=self.settings.escape_title)
        return self.renderer.render(view, options=options)

    def _entry_for(self, post: ContentItem, attrs: BlockAttributes) -> PostEntry:
        thumbnail_url = None
        if attrs.display_post_thumbnail:
            thumbnail_url = self.platform.get_thumbnail_url(post.id) or None

        date_iso = date_display = None
        if attrs.display_post_date:
            date_iso = self.platform.get_date(post.id, ISO_8601)
            date_display = self.platform.get_date(post.id, "")

        return PostEntry(
            permalink=self.platform.get_permalink(post.id),
            title=self.platform.get_title(post.id),
            thumbnail_url=thumbnail_url,
            date_iso=date_iso,
            date_display=date_display,
        )


__all__ = ["MoreFromWidget"]
