"""Factory helpers for constructing the reference host."""

from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from more_from_widget.config import WidgetSettings
from more_from_widget.repositories.post_repository import PostRepository

from .local import LocalPlatform


def create_local_platform(
    session_factory: sessionmaker[Session],
    settings: WidgetSettings | None = None,
) -> LocalPlatform:
    """Build a LocalPlatform whose permalinks hang off ``settings.site_url``."""
    settings = settings or WidgetSettings()
    repository = PostRepository(session_factory, permalink_base=settings.site_url)
    return LocalPlatform(repository, settings)


__all__ = ["create_local_platform"]
