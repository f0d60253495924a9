"""Path management for the reminder bot.

The base directory can be overridden with the REMINDER_HOME environment
variable and defaults to ~/.reminder.
"""

import os
from functools import lru_cache
from pathlib import Path

ENV_VAR = "REMINDER_HOME"


@lru_cache(maxsize=1)
def get_reminder_home() -> Path:
    """Get the base directory for reminder configuration.

    Resolution order:
    1. REMINDER_HOME environment variable (if set)
    2. Platform default (~/.reminder)
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser().resolve()

    return Path.home() / ".reminder"


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_reminder_home() / "config.toml"
