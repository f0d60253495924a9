"""Slack delivery."""

from reminder.slack.client import DEFAULT_BASE_URL, SlackClient

__all__ = ["DEFAULT_BASE_URL", "SlackClient"]
