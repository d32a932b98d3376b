"""Query primitives for the post repository."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from sqlalchemy import select
from sqlalchemy.sql import Select

from more_from_widget.db.schema import DbPost, DbPostCategory
from more_from_widget.models.content import ContentItem, PostStatus

ResultFilter = Callable[[list[ContentItem]], list[ContentItem]]


@dataclass(frozen=True, slots=True)
class ContentQuery:
    """Content query arguments as the widget sends them to the host.

    ``limit`` below zero means no limit. ``suppress_filters`` skips the result
    filters registered on the repository.
    """

    category_id: int | None = None
    limit: int = 3
    ignore_sticky: bool = True
    suppress_filters: bool = True
    status: PostStatus | str | Sequence[PostStatus | str] = PostStatus.PUBLISH

    def __post_init__(self) -> None:
        if isinstance(self.limit, bool) or not isinstance(self.limit, int):
            raise TypeError("ContentQuery.limit must be an integer.")


def _status_values(status: PostStatus | str | Sequence[PostStatus | str]) -> list[str]:
    if isinstance(status, (PostStatus, str)):
        status = [status]
    return [s.value if isinstance(s, PostStatus) else str(s) for s in status]


def build_post_select(query: ContentQuery) -> Select:
    """Return a SELECT over posts matching the structural parts of ``query``.

    Ordering is newest first with id as tie-breaker; sticky pinning and the
    limit are applied by the repository.
    """
    stmt = select(DbPost).where(DbPost.status.in_(_status_values(query.status)))

    if query.category_id is not None:
        stmt = stmt.where(
            DbPost.id.in_(
                select(DbPostCategory.post_id).where(
                    DbPostCategory.category_id == query.category_id
                )
            )
        )

    return stmt.order_by(DbPost.published_at.desc(), DbPost.id.desc())


__all__ = ["ContentQuery", "ResultFilter", "build_post_select"]
