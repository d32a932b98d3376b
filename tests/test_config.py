from __future__ import annotations

from pathlib import Path

import pytest

from more_from_widget.config import BUNDLED_PLUGIN_DIR, WidgetSettings


def test_defaults_point_at_package_assets() -> None:
    settings = WidgetSettings()

    assert settings.plugin_dir == BUNDLED_PLUGIN_DIR
    assert settings.escape_title is False
    assert settings.nonce_lifetime == 86400
    assert settings.database_url is None


def test_from_env_reads_prefixed_values(tmp_path: Path) -> None:
    env = {
        "MORE_FROM_PLUGIN_DIR": str(tmp_path),
        "MORE_FROM_PLUGIN_URL": "https://cdn.example.com/plugin",
        "MORE_FROM_SITE_URL": "https://example.com",
        "MORE_FROM_NONCE_SECRET": "s3cret",
        "MORE_FROM_NONCE_LIFETIME": "3600",
        "MORE_FROM_DATE_FORMAT": "%Y-%m-%d",
        "MORE_FROM_ESCAPE_TITLE": "yes",
        "MORE_FROM_SQLITE_PATH": "posts.db",
        "UNRELATED": "ignored",
    }

    settings = WidgetSettings.from_env(env)

    assert settings.plugin_dir == tmp_path.resolve()
    assert settings.plugin_url == "https://cdn.example.com/plugin"
    assert settings.site_url == "https://example.com"
    assert settings.nonce_secret == "s3cret"
    assert settings.nonce_lifetime == 3600
    assert settings.date_format == "%Y-%m-%d"
    assert settings.escape_title is True
    assert settings.sqlite_path == Path("posts.db")
    assert settings.database_url is None


def test_from_env_honours_custom_prefix() -> None:
    settings = WidgetSettings.from_env({"GBMF_ESCAPE_TITLE": "0"}, prefix="GBMF_")

    assert settings.escape_title is False


@pytest.mark.parametrize(
    "name, value",
    [
        ("MORE_FROM_ESCAPE_TITLE", "maybe"),
        ("MORE_FROM_NONCE_LIFETIME", "soon"),
        ("MORE_FROM_NONCE_LIFETIME", "0"),
    ],
)
def test_from_env_rejects_malformed_values(name: str, value: str) -> None:
    with pytest.raises(ValueError, match=name):
        WidgetSettings.from_env({name: value})


def test_secret_is_hidden_from_repr() -> None:
    assert "hunter2" not in repr(WidgetSettings(nonce_secret="hunter2"))
