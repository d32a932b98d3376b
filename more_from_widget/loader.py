"""Load post fixtures from JSON into ``ContentItem`` snapshots."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Mapping

from more_from_widget.models.content import ContentItem
from more_from_widget.repositories.post_repository import PostRepository


class PostLoadError(ValueError):
    """Raised when a post record cannot be turned into a ContentItem."""


def posts_from_records(
    records: Iterable[Mapping[str, Any]],
    repository: PostRepository,
) -> list[ContentItem]:
    """Convert raw records into posts whose permalinks match ``repository``.

    Records use ``categories`` for category ids and an optional ``slug``;
    every other key maps onto a ``ContentItem`` field.
    """
    posts: list[ContentItem] = []
    for index, record in enumerate(records):
        payload = dict(record)
        slug = payload.pop("slug", None)
        try:
            payload["category_ids"] = tuple(payload.pop("categories", payload.get("category_ids", ())))
            if "id" in payload and "permalink" not in payload:
                payload["permalink"] = repository.permalink_for(int(payload["id"]), slug)
            posts.append(ContentItem.model_validate(payload))
        except (TypeError, ValueError) as exc:
            raise PostLoadError(f"Post record #{index} is invalid: {exc}") from exc
    return posts


def load_posts_path(path: str | Path, repository: PostRepository) -> list[ContentItem]:
    """Read a JSON array of post records from ``path``."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise PostLoadError(f"{path} must contain a JSON array of posts.")
    return posts_from_records(data, repository)


__all__ = ["PostLoadError", "load_posts_path", "posts_from_records"]
