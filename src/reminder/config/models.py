"""Configuration models using Pydantic."""

import logging

from pydantic import BaseModel, Field, SecretStr, model_validator

from reminder.slack.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

TOKEN_ENV_VAR = "SLACK_BOT_TOKEN"
CHANNEL_ENV_VAR = "SLACK_CHANNEL_ID"

DEFAULT_REMINDER_TEXT = "This is your scheduled reminder!"


class ConfigError(Exception):
    """Configuration error."""

    pass


class SlackConfig(BaseModel):
    """Configuration for Slack delivery."""

    bot_token: SecretStr | None = None
    channel_id: str | None = None
    base_url: str = DEFAULT_BASE_URL
    # Bounded so a hung request cannot stall a runner indefinitely
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)


class ScheduleConfig(BaseModel):
    """A single recurring reminder.

    ``cron`` is a six-field expression with seconds first, evaluated in UTC.
    ``channel`` overrides the default Slack channel for this schedule.
    """

    name: str = Field(min_length=1)
    cron: str
    text: str = DEFAULT_REMINDER_TEXT
    channel: str | None = None


def _default_schedules() -> list[ScheduleConfig]:
    return [
        ScheduleConfig(name="sunday-2pm", cron="0 0 14 * * SUN"),
        ScheduleConfig(name="sunday-10pm", cron="0 0 22 * * SUN"),
    ]


class ReminderConfig(BaseModel):
    """Root configuration model."""

    slack: SlackConfig = Field(default_factory=SlackConfig)
    schedules: list[ScheduleConfig] = Field(default_factory=_default_schedules)

    @model_validator(mode="after")
    def _check_unique_names(self) -> "ReminderConfig":
        seen: set[str] = set()
        for schedule in self.schedules:
            if schedule.name in seen:
                raise ValueError(f"Duplicate schedule name: {schedule.name}")
            seen.add(schedule.name)
        if not self.schedules:
            logger.warning("No schedules configured")
        return self

    def require_credentials(self) -> tuple[SecretStr, str]:
        """Get the bot token and default channel, failing if either is unset.

        Raises:
            ConfigError: Naming the environment variable that must be set.
        """
        token = self.slack.bot_token
        if token is None or not token.get_secret_value():
            raise ConfigError(f"{TOKEN_ENV_VAR} must be set in the environment")
        if not self.slack.channel_id:
            raise ConfigError(f"{CHANNEL_ENV_VAR} must be set in the environment")
        return token, self.slack.channel_id

    def channel_for(self, schedule: ScheduleConfig) -> str:
        """Resolve the destination channel for a schedule."""
        channel = schedule.channel or self.slack.channel_id
        if not channel:
            raise ConfigError(
                f"Schedule {schedule.name!r} has no channel and "
                f"{CHANNEL_ENV_VAR} is not set"
            )
        return channel
