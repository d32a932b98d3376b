"""SQLAlchemy-backed repository for host posts."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Sequence

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.orm import Session, sessionmaker

from more_from_widget.db.schema import DbPost, DbPostCategory
from more_from_widget.models.content import ContentItem, PostStatus
from more_from_widget.repositories.filters import ContentQuery, ResultFilter, build_post_select

logger = logging.getLogger(__name__)


class RepositoryError(RuntimeError):
    """Base class for repository-level errors."""


class PostNotFoundError(RepositoryError):
    """Raised when a post cannot be found for a requested operation."""


class PostRepository:
    """Persists posts and hydrates them into ``ContentItem`` snapshots."""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        permalink_base: str = "http://localhost",
    ):
        self._session_factory = session_factory
        self._permalink_base = permalink_base.rstrip("/")
        self._result_filters: list[ResultFilter] = []

    def add_result_filter(self, result_filter: ResultFilter) -> None:
        """Register a filter run on query results unless the query suppresses it."""
        self._result_filters.append(result_filter)

    def get_post(self, post_id: int) -> ContentItem | None:
        with self._session_factory() as session:
            row = session.get(DbPost, post_id)
            if row is None:
                return None
            return self._to_model(row)

    def require_post(self, post_id: int) -> ContentItem:
        post = self.get_post(post_id)
        if post is None:
            raise PostNotFoundError(f"Post {post_id} does not exist.")
        return post

    def query_posts(self, query: ContentQuery) -> list[ContentItem]:
        """Return posts matching ``query`` in display order."""
        if query.limit == 0:
            return []

        stmt = build_post_select(query)
        if not query.ignore_sticky:
            # Pinned posts lead; the remaining order is preserved.
            stmt = stmt.order_by(None).order_by(
                DbPost.sticky.desc(), DbPost.published_at.desc(), DbPost.id.desc()
            )
        if query.limit > 0:
            stmt = stmt.limit(query.limit)

        with self._session_factory() as session:
            rows = session.scalars(stmt).all()
            posts = [self._to_model(row) for row in rows]

        if not query.suppress_filters:
            for result_filter in self._result_filters:
                posts = list(result_filter(posts))

        logger.debug(
            "Post query category=%s limit=%s returned %d post(s)",
            query.category_id,
            query.limit,
            len(posts),
        )
        return posts

    def upsert_posts(self, posts: Sequence[ContentItem]) -> None:
        """Insert or update posts together with their category links."""
        if not posts:
            return

        with self._session_factory() as session:
            bind = session.get_bind()
            if bind is not None and bind.dialect.name == "postgresql":
                self._bulk_upsert_postgres(session, posts)
            else:
                for post in posts:
                    session.merge(self._to_record(post))
            session.commit()

    def delete_posts(self, post_ids: Sequence[int]) -> int:
        """Delete posts by id and return how many rows were removed."""
        ids = list(post_ids)
        if not ids:
            return 0
        with self._session_factory() as session:
            session.execute(delete(DbPostCategory).where(DbPostCategory.post_id.in_(ids)))
            result = session.execute(delete(DbPost).where(DbPost.id.in_(ids)))
            session.commit()
            return result.rowcount or 0

    # ----------------------------------------------------------------- Helpers
    def permalink_for(self, post_id: int, slug: str | None) -> str:
        if slug:
            return f"{self._permalink_base}/{slug}/"
        return f"{self._permalink_base}/?p={post_id}"

    def _bulk_upsert_postgres(self, session: Session, posts: Sequence[ContentItem]) -> None:
        payloads = [self._to_payload(post) for post in posts]
        stmt = pg_insert(DbPost).values(payloads)
        update_cols = {
            column.name: getattr(stmt.excluded, column.name)
            for column in DbPost.__table__.columns
            if column.name != "id"
        }
        session.execute(stmt.on_conflict_do_update(index_elements=[DbPost.id], set_=update_cols))

        ids = [post.id for post in posts]
        session.execute(delete(DbPostCategory).where(DbPostCategory.post_id.in_(ids)))
        links = [
            {"post_id": post.id, "category_id": category_id}
            for post in posts
            for category_id in dict.fromkeys(post.category_ids)
        ]
        if links:
            session.execute(pg_insert(DbPostCategory).values(links))

    def _to_payload(self, post: ContentItem) -> dict[str, Any]:
        return {
            "id": post.id,
            "title": post.title,
            "slug": _slug_from_permalink(post.permalink, self._permalink_base),
            "status": post.status.value,
            "sticky": post.sticky,
            "published_at": _as_utc(post.published_at),
            "thumbnail_url": post.thumbnail_url,
        }

    def _to_record(self, post: ContentItem) -> DbPost:
        record = DbPost(**self._to_payload(post))
        record.categories = [
            DbPostCategory(post_id=post.id, category_id=category_id)
            for category_id in dict.fromkeys(post.category_ids)
        ]
        return record

    def _to_model(self, row: DbPost) -> ContentItem:
        return ContentItem(
            id=row.id,
            title=row.title,
            permalink=self.permalink_for(row.id, row.slug),
            published_at=_as_utc(row.published_at),
            thumbnail_url=row.thumbnail_url,
            category_ids=tuple(sorted(link.category_id for link in row.categories)),
            sticky=row.sticky,
            status=PostStatus(row.status),
        )


def _as_utc(value: datetime) -> datetime:
    """Naive values are treated as UTC; SQLite drops the offset on write."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _slug_from_permalink(permalink: str, base: str) -> str:
    """Recover the slug from a permalink built by ``permalink_for``."""
    if not permalink or not permalink.startswith(f"{base}/") or "?p=" in permalink:
        return ""
    return permalink[len(base) + 1 :].strip("/")


__all__ = [
    "PostNotFoundError",
    "PostRepository",
    "RepositoryError",
]
