from __future__ import annotations

import os
from collections.abc import Iterator
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable

import pytest
from sqlalchemy import delete
from sqlalchemy.engine import Engine

from more_from_widget.config import WidgetSettings
from more_from_widget.db.engine import create_engine, create_session_factory
from more_from_widget.db.schema import Base, DbPost, DbPostCategory, create_all
from more_from_widget.models.content import ContentItem, PostStatus
from more_from_widget.platform import LocalPlatform
from more_from_widget.repositories.post_repository import PostRepository
from more_from_widget.widget import MoreFromWidget

SITE_URL = "http://example.test"
PLUGIN_URL = "http://example.test/wp-content/plugins/gb-more-from-widget"
FIXED_NOW = 1_700_000_000.0
BASE_DATE = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)

ASSET_FILES = (
    "assets/js/block.build.js",
    "assets/css/editor.css",
    "assets/css/style.css",
)


@pytest.fixture(scope="session")
def postgres_url() -> str | None:
    """Return the Postgres test URL if provided via env."""
    return os.getenv("POSTGRES_TEST_URL") or os.getenv("DATABASE_URL")


@pytest.fixture
def engine(postgres_url: str | None) -> Iterator[Engine]:
    """Yield an engine targeting Postgres when configured; otherwise SQLite in-memory."""
    engine = create_engine(postgres_url) if postgres_url else create_engine()
    create_all(engine)
    try:
        yield engine
    finally:
        with engine.begin() as connection:
            if engine.dialect.name == "sqlite":
                Base.metadata.drop_all(bind=connection)
            else:
                connection.execute(delete(DbPostCategory))
                connection.execute(delete(DbPost))


@pytest.fixture
def session_factory(engine: Engine):
    return create_session_factory(engine)


@pytest.fixture
def plugin_dir(tmp_path: Path) -> Path:
    for relative in ASSET_FILES:
        asset = tmp_path / relative
        asset.parent.mkdir(parents=True, exist_ok=True)
        asset.write_text("/* asset */\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(plugin_dir: Path) -> WidgetSettings:
    return WidgetSettings(
        plugin_dir=plugin_dir,
        plugin_url=PLUGIN_URL,
        site_url=SITE_URL,
        nonce_secret="test-secret",
    )


@pytest.fixture
def repository(session_factory) -> PostRepository:
    return PostRepository(session_factory, permalink_base=SITE_URL)


@pytest.fixture
def platform(repository: PostRepository, settings: WidgetSettings) -> LocalPlatform:
    return LocalPlatform(repository, settings, clock=lambda: FIXED_NOW)


@pytest.fixture
def widget(platform: LocalPlatform, settings: WidgetSettings) -> MoreFromWidget:
    widget = MoreFromWidget(platform=platform, settings=settings)
    widget.initialize()
    return widget


@pytest.fixture
def post_factory(repository: PostRepository) -> Callable[..., ContentItem]:
    counter = {"next_id": 1}

    def _factory(
        *,
        post_id=None,
        title=None,
        categories=(5,),
        published_at=None,
        thumbnail_url=None,
        sticky=False,
        status=PostStatus.PUBLISH,
        slug=None,
    ) -> ContentItem:
        if post_id is None:
            post_id = counter["next_id"]
        counter["next_id"] = max(counter["next_id"], post_id) + 1
        slug = f"post-{post_id}" if slug is None else slug
        return ContentItem(
            id=post_id,
            title=title if title is not None else f"Post {post_id}",
            permalink=repository.permalink_for(post_id, slug),
            published_at=published_at or BASE_DATE + timedelta(days=post_id),
            thumbnail_url=thumbnail_url,
            category_ids=tuple(categories),
            sticky=sticky,
            status=status,
        )

    return _factory
