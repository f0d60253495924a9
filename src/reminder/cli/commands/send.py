"""Send a single reminder immediately."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from reminder.cli.console import error, success


def register(app: typer.Typer) -> None:
    """Register the send command."""

    @app.command()
    def send(
        config: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="Path to configuration file",
            ),
        ] = None,
        text: Annotated[
            str | None,
            typer.Option("--text", "-t", help="Message text"),
        ] = None,
        channel: Annotated[
            str | None,
            typer.Option("--channel", help="Channel ID (default: SLACK_CHANNEL_ID)"),
        ] = None,
    ) -> None:
        """Send one message now to verify credentials and channel."""
        from reminder.config import DEFAULT_REMINDER_TEXT, ConfigError, load_config
        from reminder.scheduling import DeliveryError, Notification
        from reminder.slack import SlackClient

        try:
            reminder_config = load_config(config)
            token, default_channel = reminder_config.require_credentials()
        except ConfigError as e:
            error(str(e))
            raise typer.Exit(1) from None

        notification = Notification(
            channel=channel or default_channel,
            text=text or DEFAULT_REMINDER_TEXT,
        )

        async def do_send():
            async with SlackClient(
                token,
                base_url=reminder_config.slack.base_url,
                timeout=reminder_config.slack.timeout,
            ) as slack:
                return await slack.send(notification)

        try:
            outcome = asyncio.run(do_send())
        except DeliveryError as e:
            error(f"Error sending message: {e}")
            raise typer.Exit(1) from None

        if outcome.ok:
            success(f"Message sent to {notification.channel}")
        else:
            error(f"Failed to send message: {outcome.body or outcome.error}")
            raise typer.Exit(1)
