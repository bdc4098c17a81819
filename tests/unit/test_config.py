"""Tests for settings loading."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from elementor_mcp.config import (
    API_URL_VARS,
    LOG_FILE_VAR,
    PASSWORD_VARS,
    USERNAME_VARS,
    load_settings,
    normalize_api_url,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start every test with no WordPress variables set."""
    for name in (*API_URL_VARS, *USERNAME_VARS, *PASSWORD_VARS, LOG_FILE_VAR):
        # set first so that undo also removes values a .env file loads
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    yield


@pytest.fixture
def no_env_file(tmp_path: Path) -> Path:
    return tmp_path / "missing.env"


def test_normalize_api_url_appends_rest_prefix() -> None:
    assert normalize_api_url("https://example.com") == "https://example.com/wp-json/wp/v2/"
    assert normalize_api_url("https://example.com/") == "https://example.com/wp-json/wp/v2/"


def test_normalize_api_url_keeps_existing_prefix() -> None:
    assert normalize_api_url("https://example.com/wp-json/wp/v2") == (
        "https://example.com/wp-json/wp/v2/"
    )


def test_load_settings_requires_url(no_env_file: Path) -> None:
    with pytest.raises(RuntimeError, match="WordPress API URL not found"):
        load_settings(env_file=no_env_file)


def test_load_settings_reads_environment(
    monkeypatch: pytest.MonkeyPatch, no_env_file: Path, tmp_path: Path
) -> None:
    monkeypatch.setenv("WORDPRESS_BASE_URL", "https://site.test")
    monkeypatch.setenv("WORDPRESS_USERNAME", "editor")
    monkeypatch.setenv("WORDPRESS_APP_PASSWORD", "abcd efgh ijkl")
    monkeypatch.setenv(LOG_FILE_VAR, str(tmp_path / "mcp.log"))

    settings = load_settings(env_file=no_env_file)

    assert settings.api_url == "https://site.test/wp-json/wp/v2/"
    assert settings.username == "editor"
    assert settings.password == "abcdefghijkl"
    assert settings.has_credentials is True
    assert settings.log_file == tmp_path / "mcp.log"


def test_load_settings_first_url_var_wins(
    monkeypatch: pytest.MonkeyPatch, no_env_file: Path
) -> None:
    monkeypatch.setenv("WORDPRESS_API_URL", "https://a.test/wp-json/wp/v2/")
    monkeypatch.setenv("WORDPRESS_BASE_URL", "https://b.test")

    settings = load_settings(env_file=no_env_file)

    assert settings.api_url == "https://a.test/wp-json/wp/v2/"
    assert settings.has_credentials is False


def test_load_settings_reads_env_file(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("WORDPRESS_API_URL=https://dotenv.test\n")

    settings = load_settings(env_file=env_file)

    assert settings.api_url == "https://dotenv.test/wp-json/wp/v2/"
