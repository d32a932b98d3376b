"""Runtime settings for the widget and its reference host."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

PACKAGE_ROOT = Path(__file__).resolve().parent
BUNDLED_PLUGIN_DIR = PACKAGE_ROOT / "plugin"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


@dataclass(frozen=True, slots=True)
class WidgetSettings:
    """Filesystem, URL and rendering settings shared by the widget and host.

    ``plugin_dir`` is the directory that holds ``assets/``; ``plugin_url`` is
    the public URL of that same directory. The default points at the copies of
    the editor and front-end assets bundled with the package.
    """

    plugin_dir: Path = BUNDLED_PLUGIN_DIR
    plugin_url: str = "http://localhost/wp-content/plugins/gb-more-from-widget"
    site_url: str = "http://localhost"
    nonce_secret: str = field(default="change-me", repr=False)
    nonce_lifetime: int = 86400
    date_format: str = "%B %d, %Y"
    escape_title: bool = False
    database_url: str | None = None
    sqlite_path: Path | None = None

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        prefix: str = "MORE_FROM_",
    ) -> WidgetSettings:
        """Build settings from ``PREFIX_*`` environment variables."""
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        def read(name: str) -> str | None:
            return env.get(f"{prefix}{name}")

        if (raw := read("PLUGIN_DIR")) is not None:
            values["plugin_dir"] = Path(raw).expanduser().resolve()
        if (raw := read("PLUGIN_URL")) is not None:
            values["plugin_url"] = raw
        if (raw := read("SITE_URL")) is not None:
            values["site_url"] = raw
        if (raw := read("NONCE_SECRET")) is not None:
            values["nonce_secret"] = raw
        if (raw := read("NONCE_LIFETIME")) is not None:
            values["nonce_lifetime"] = _parse_int(f"{prefix}NONCE_LIFETIME", raw)
        if (raw := read("DATE_FORMAT")) is not None:
            values["date_format"] = raw
        if (raw := read("ESCAPE_TITLE")) is not None:
            values["escape_title"] = _parse_bool(f"{prefix}ESCAPE_TITLE", raw)
        if raw := read("DATABASE_URL"):
            values["database_url"] = raw
        if raw := read("SQLITE_PATH"):
            values["sqlite_path"] = Path(raw)

        return cls(**values)  # type: ignore[arg-type]


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}.")


def _parse_int(name: str, raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}.")
    return value


__all__ = ["BUNDLED_PLUGIN_DIR", "PACKAGE_ROOT", "WidgetSettings"]
