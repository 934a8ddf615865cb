"""Unified configuration loaded from .contentdesk.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from contentdesk.content.models import DEFAULT_BRAND_LABEL
from contentdesk.content.renderer import EMPTY_PLACEHOLDER
from contentdesk.content.session import COPIED_ACK_SECONDS
from contentdesk.integrations.api import DEFAULT_BASE_URL, ApiConfig, load_session_token

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".contentdesk.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "contentdesk" / "config.toml"


class ApiSectionConfig(BaseModel):
    """[api] section."""

    base_url: str = DEFAULT_BASE_URL
    token: str = ""
    timeout: int = 30


class SessionSectionConfig(BaseModel):
    """[session] section — where the login flow leaves its token."""

    token_file: str = ""


class EditorSectionConfig(BaseModel):
    """[editor] section."""

    brand_placeholder: str = DEFAULT_BRAND_LABEL
    copied_ack_seconds: float = COPIED_ACK_SECONDS
    empty_placeholder: str = EMPTY_PLACEHOLDER


class ContentDeskConfig(BaseModel):
    """Top-level configuration model."""

    api: ApiSectionConfig = Field(default_factory=ApiSectionConfig)
    session: SessionSectionConfig = Field(default_factory=SessionSectionConfig)
    editor: EditorSectionConfig = Field(default_factory=EditorSectionConfig)

    def to_api_config(self) -> ApiConfig:
        """Convert to ApiConfig, falling back to the session file for the token."""
        token = self.api.token
        if not token:
            token_file = Path(self.session.token_file).expanduser() if self.session.token_file else None
            token = load_session_token(token_file)
        return ApiConfig(base_url=self.api.base_url, token=token, timeout=self.api.timeout)


def load_config(path: str | Path | None = None) -> ContentDeskConfig:
    """Read the first config file found, then overlay environment variables.

    An explicit ``path`` is the only candidate when given.  Otherwise
    ``.contentdesk.toml`` in each search directory is tried, then the
    global file under ``~/.config/contentdesk``.
    """
    if path is not None:
        candidates = [Path(path)]
    else:
        candidates = [d / CONFIG_FILENAME for d in CONFIG_SEARCH_PATHS]
        candidates.append(GLOBAL_CONFIG_PATH)

    found = next((c for c in candidates if c.is_file()), None)
    if found is None:
        if path is not None:
            logger.warning("Config file not found: %s", path)
        return _apply_env_vars(ContentDeskConfig())

    logger.info("Loaded config from %s", found)
    return _apply_env_vars(ContentDeskConfig.model_validate(_load_toml(found)))


_CLI_FIELDS: dict[str, tuple[str, str]] = {
    "api_url": ("api", "base_url"),
    "token": ("api", "token"),
    "timeout": ("api", "timeout"),
    "token_file": ("session", "token_file"),
}

_ENV_FIELDS: dict[str, tuple[str, str]] = {
    "CONTENTDESK_API_URL": ("api", "base_url"),
    "CONTENTDESK_TOKEN": ("api", "token"),
    "CONTENTDESK_TIMEOUT": ("api", "timeout"),
    "CONTENTDESK_TOKEN_FILE": ("session", "token_file"),
}


def merge_cli_overrides(config: ContentDeskConfig, **cli_kwargs: object) -> ContentDeskConfig:
    """Overlay the CLI flags that were actually passed (not None)."""
    overrides = {
        _CLI_FIELDS[key]: value
        for key, value in cli_kwargs.items()
        if value is not None and key in _CLI_FIELDS
    }
    return _overlay(config, overrides)


def _load_toml(path: Path) -> dict[str, object]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: ContentDeskConfig) -> ContentDeskConfig:
    overrides = {
        field: os.environ[env_var]
        for env_var, field in _ENV_FIELDS.items()
        if env_var in os.environ
    }
    try:
        return _overlay(config, overrides)
    except ValueError:
        logger.warning("Ignoring invalid environment overrides")
        return config


def _overlay(
    config: ContentDeskConfig, overrides: dict[tuple[str, str], object]
) -> ContentDeskConfig:
    """Return a revalidated copy with ``(section, field)`` values replaced."""
    if not overrides:
        return config
    data = config.model_dump()
    for (section, field), value in overrides.items():
        data[section][field] = value
    return ContentDeskConfig.model_validate(data)
