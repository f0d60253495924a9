"""Slack reminder bot - posts messages on fixed weekly schedules."""

__version__ = "0.1.0"
