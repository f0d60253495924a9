"""CLI command modules."""

from reminder.cli.commands import config, send, serve, upcoming

__all__ = [
    "config",
    "send",
    "serve",
    "upcoming",
]
