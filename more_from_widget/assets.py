"""Script and style declarations for the editor and the public site."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from more_from_widget.config import WidgetSettings
from more_from_widget.platform.base import Platform

logger = logging.getLogger(__name__)

SCRIPT_DATA_KEY = "gbmfObject"
NONCE_ACTION = "gbmf_nonce"
AJAX_PATH = "admin-ajax.php"


class AssetKind(str, Enum):
    SCRIPT = "script"
    STYLE = "style"


@dataclass(frozen=True, slots=True)
class AssetDeclaration:
    handle: str
    path: str
    kind: AssetKind
    deps: tuple[str, ...] = ()


EDITOR_SCRIPT = AssetDeclaration(
    handle="gbmf-js",
    path="assets/js/block.build.js",
    kind=AssetKind.SCRIPT,
    deps=("wp-blocks", "wp-i18n", "wp-element", "moment"),
)
EDITOR_STYLE = AssetDeclaration(
    handle="gbmf-editor-style",
    path="assets/css/editor.css",
    kind=AssetKind.STYLE,
    deps=("wp-edit-blocks",),
)
FRONTEND_STYLE = AssetDeclaration(
    handle="gbmf-style",
    path="assets/css/style.css",
    kind=AssetKind.STYLE,
    deps=("wp-blocks",),
)

EDITOR_ASSETS = (EDITOR_SCRIPT, EDITOR_STYLE)
FRONTEND_ASSETS = (FRONTEND_STYLE,)


def asset_version(plugin_dir: Path, relative_path: str) -> str | None:
    """Return the file's modification time as a version string, or ``None``."""
    asset_path = Path(plugin_dir) / relative_path
    try:
        return str(int(asset_path.stat().st_mtime))
    except FileNotFoundError:
        logger.warning("Asset %s is missing; enqueueing without a version", asset_path)
        return None


def enqueue_asset(platform: Platform, settings: WidgetSettings, asset: AssetDeclaration) -> None:
    url = platform.plugins_url(asset.path)
    version = asset_version(settings.plugin_dir, asset.path)
    if asset.kind is AssetKind.SCRIPT:
        platform.enqueue_script(asset.handle, url, asset.deps, version)
    else:
        platform.enqueue_style(asset.handle, url, asset.deps, version)


def register_assets(
    platform: Platform,
    settings: WidgetSettings,
    *,
    for_editor: bool,
    post_id: int | None = None,
) -> None:
    """Enqueue the editor or the public-facing asset set.

    The editor script also receives ``gbmfObject`` with the ajax endpoint, a
    fresh nonce and the id of the post being edited.
    """
    if not for_editor:
        for asset in FRONTEND_ASSETS:
            enqueue_asset(platform, settings, asset)
        return

    enqueue_asset(platform, settings, EDITOR_SCRIPT)
    platform.inject_script_data(
        EDITOR_SCRIPT.handle,
        SCRIPT_DATA_KEY,
        {
            "ajax_url": platform.admin_url(AJAX_PATH),
            "ajax_nonce": platform.create_nonce(NONCE_ACTION),
            "post_id": post_id,
        },
    )
    enqueue_asset(platform, settings, EDITOR_STYLE)


__all__ = [
    "AJAX_PATH",
    "AssetDeclaration",
    "AssetKind",
    "EDITOR_ASSETS",
    "EDITOR_SCRIPT",
    "EDITOR_STYLE",
    "FRONTEND_ASSETS",
    "FRONTEND_STYLE",
    "NONCE_ACTION",
    "SCRIPT_DATA_KEY",
    "asset_version",
    "enqueue_asset",
    "register_assets",
]
