"""Configuration module."""

from reminder.config.loader import find_config_path, load_config
from reminder.config.models import (
    CHANNEL_ENV_VAR,
    DEFAULT_REMINDER_TEXT,
    TOKEN_ENV_VAR,
    ConfigError,
    ReminderConfig,
    ScheduleConfig,
    SlackConfig,
)
from reminder.config.paths import get_config_path, get_reminder_home

__all__ = [
    "CHANNEL_ENV_VAR",
    "DEFAULT_REMINDER_TEXT",
    "TOKEN_ENV_VAR",
    "ConfigError",
    "ReminderConfig",
    "ScheduleConfig",
    "SlackConfig",
    "find_config_path",
    "get_config_path",
    "get_reminder_home",
    "load_config",
]
