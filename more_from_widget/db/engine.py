"""Engine and session helpers for the reference host's post store."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from sqlalchemy import create_engine as sa_create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from more_from_widget.config import WidgetSettings

IN_MEMORY_URL = "sqlite+pysqlite:///:memory:"


def create_engine(
    connection_string: str | None = None,
    *,
    sqlite_path: str | Path | None = None,
    echo: bool = False,
    connect_args: Mapping[str, Any] | None = None,
) -> Engine:
    """Create an engine for the post store.

    Parameters
    ----------
    connection_string:
        Full SQLAlchemy URL. Cannot be combined with ``sqlite_path``.
    sqlite_path:
        Path to a SQLite file; user references are expanded.
    echo:
        Forwarded to SQLAlchemy for statement logging.
    connect_args:
        Extra DBAPI connect arguments.

    Notes
    -----
    Without a URL or path the store lives in a single shared in-memory SQLite
    connection, so every session sees the same posts.
    """
    if connection_string and sqlite_path is not None:
        raise ValueError("Provide either 'connection_string' or 'sqlite_path', not both.")

    if connection_string:
        return sa_create_engine(
            connection_string, echo=echo, future=True, connect_args=dict(connect_args or {})
        )

    if sqlite_path is not None:
        db_path = Path(sqlite_path).expanduser().resolve()
        return sa_create_engine(
            f"sqlite+pysqlite:///{db_path.as_posix()}",
            echo=echo,
            future=True,
            connect_args=dict(connect_args or {}),
        )

    args = {"check_same_thread": False, **(connect_args or {})}
    return sa_create_engine(
        IN_MEMORY_URL, echo=echo, future=True, connect_args=args, poolclass=StaticPool
    )


def engine_from_settings(settings: WidgetSettings, *, echo: bool = False) -> Engine:
    return create_engine(settings.database_url, sqlite_path=settings.sqlite_path, echo=echo)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Return a session factory bound to ``engine``."""
    return sessionmaker(bind=engine, class_=Session, expire_on_commit=False, future=True)


__all__ = ["IN_MEMORY_URL", "create_engine", "create_session_factory", "engine_from_settings"]
