"""Configuration for the WordPress + Elementor MCP server."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Env var names. First one set wins.
API_URL_VARS: tuple[str, ...] = ("WORDPRESS_API_URL", "WORDPRESS_BASE_URL")
USERNAME_VARS: tuple[str, ...] = ("WORDPRESS_USERNAME",)
PASSWORD_VARS: tuple[str, ...] = (
    "WORDPRESS_PASSWORD",
    "WORDPRESS_APP_PASSWORD",
    "WORDPRESS_APPLICATION_PASSWORD",
)
LOG_FILE_VAR = "ELEMENTOR_MCP_LOG_FILE"

REST_PREFIX = "wp-json/wp/v2/"

# Seconds before an HTTP request to WordPress is abandoned.
REQUEST_TIMEOUT: float = 30.0

# Meta key holding the serialized element tree.
ELEMENTOR_DATA_KEY = "_elementor_data"


@dataclass(frozen=True)
class WordPressSettings:
    """Connection settings for one WordPress site."""

    api_url: str
    username: str | None = None
    password: str | None = None
    log_file: Path | None = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password)


def _first_env(names: tuple[str, ...]) -> str | None:
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return None


def normalize_api_url(url: str) -> str:
    """Return the REST base URL, always ending in ``/wp-json/wp/v2/``."""
    base = url if url.endswith("/") else url + "/"
    if "/wp-json/wp/v2" not in base:
        base += REST_PREFIX
    return base


def load_settings(*, env_file: Path | None = None) -> WordPressSettings:
    """Read settings from the environment (and a .env file, if present).

    Raises:
        RuntimeError: If no WordPress API URL is configured.
    """
    load_dotenv(env_file)

    api_url = _first_env(API_URL_VARS)
    if not api_url:
        msg = f"WordPress API URL not found. Set one of {list(API_URL_VARS)!r}."
        raise RuntimeError(msg)

    password = _first_env(PASSWORD_VARS)
    if password:
        # Application passwords are displayed with spaces.
        password = password.replace(" ", "")

    log_file = os.environ.get(LOG_FILE_VAR)
    return WordPressSettings(
        api_url=normalize_api_url(api_url),
        username=_first_env(USERNAME_VARS),
        password=password,
        log_file=Path(log_file).expanduser() if log_file else None,
    )
