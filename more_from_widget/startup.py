"""Startup helpers that wire the widget into a host."""

from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from more_from_widget.config import WidgetSettings
from more_from_widget.db.engine import create_session_factory, engine_from_settings
from more_from_widget.db.schema import create_all
from more_from_widget.platform.base import Platform
from more_from_widget.platform.factory import create_local_platform
from more_from_widget.widget import MoreFromWidget


def bootstrap(
    settings: WidgetSettings | None = None,
    *,
    platform: Platform | None = None,
    session_factory: sessionmaker[Session] | None = None,
) -> MoreFromWidget:
    """Return an initialized widget bound to ``platform``.

    - When no platform is given, a ``LocalPlatform`` is built on
      ``session_factory`` or, failing that, on an engine derived from
      ``settings`` with the schema created.
    - The block type is registered before the widget is returned.
    """
    settings = settings or WidgetSettings()
    if platform is None:
        if session_factory is None:
            engine = engine_from_settings(settings)
            create_all(engine)
            session_factory = create_session_factory(engine)
        platform = create_local_platform(session_factory, settings)

    widget = MoreFromWidget(platform=platform, settings=settings)
    widget.initialize()
    return widget


__all__ = ["bootstrap"]
