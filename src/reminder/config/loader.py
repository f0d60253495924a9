"""Configuration loading from TOML files and environment variables."""

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import SecretStr, ValidationError

from reminder.config.models import (
    CHANNEL_ENV_VAR,
    TOKEN_ENV_VAR,
    ConfigError,
    ReminderConfig,
)
from reminder.config.paths import get_config_path


def _get_default_config_paths() -> list[Path]:
    """Get ordered list of default config file locations."""
    return [
        Path("reminder.toml"),  # Current directory
        get_config_path(),  # ~/.reminder/config.toml (or REMINDER_HOME)
    ]


def _resolve_env(config: dict[str, Any]) -> dict[str, Any]:
    """Fill Slack credentials from the environment where not set in config."""
    slack = config.setdefault("slack", {})
    if slack.get("bot_token") is None:
        if token := os.environ.get(TOKEN_ENV_VAR):
            slack["bot_token"] = SecretStr(token)
    if slack.get("channel_id") is None:
        if channel := os.environ.get(CHANNEL_ENV_VAR):
            slack["channel_id"] = channel
    return config


def find_config_path(path: Path | None = None) -> Path | None:
    """Locate the config file to load.

    Raises:
        ConfigError: If an explicit path does not exist.
    """
    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        return config_path

    for default_path in _get_default_config_paths():
        expanded = default_path.expanduser()
        if expanded.exists():
            return expanded
    return None


def load_config(path: Path | None = None) -> ReminderConfig:
    """Load configuration from an optional TOML file plus the environment.

    Without a config file the built-in schedules are used and credentials
    come from SLACK_BOT_TOKEN and SLACK_CHANNEL_ID.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    raw_config: dict[str, Any] = {}

    config_path = find_config_path(path)
    if config_path is not None:
        try:
            with config_path.open("rb") as f:
                raw_config = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    raw_config = _resolve_env(raw_config)

    try:
        return ReminderConfig.model_validate(raw_config)
    except ValidationError as e:
        source = config_path or "environment"
        raise ConfigError(f"Configuration validation failed ({source}):\n{e}") from e
