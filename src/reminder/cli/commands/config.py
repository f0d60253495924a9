"""Configuration validation command."""

from datetime import UTC, datetime
from pathlib import Path
from typing import Annotated

import typer

from reminder.cli.console import console, create_table, error, success


def register(app: typer.Typer) -> None:
    """Register the config command."""

    @app.command()
    def config(
        path: Annotated[
            Path | None,
            typer.Option(
                "--path",
                "-p",
                help="Path to config file (default: reminder.toml or $REMINDER_HOME/config.toml)",
            ),
        ] = None,
    ) -> None:
        """Validate configuration and show a summary."""
        from reminder.config import (
            CHANNEL_ENV_VAR,
            TOKEN_ENV_VAR,
            ConfigError,
            find_config_path,
            load_config,
        )
        from reminder.scheduling import RecurrenceCalculator, RecurrenceParseError

        try:
            source = find_config_path(path)
            config_obj = load_config(path)
            calculators = {
                schedule.name: RecurrenceCalculator.parse(schedule.cron)
                for schedule in config_obj.schedules
            }
        except (ConfigError, RecurrenceParseError) as e:
            error(str(e))
            raise typer.Exit(1) from None

        table = create_table(
            "Configuration Summary", [("Setting", "cyan"), ("Value", "green")]
        )
        table.add_row("Source", str(source) if source else "defaults + environment")
        has_token = config_obj.slack.bot_token is not None
        table.add_row(
            "Bot token",
            "set" if has_token else f"[yellow]missing ({TOKEN_ENV_VAR})[/yellow]",
        )
        table.add_row(
            "Default channel",
            config_obj.slack.channel_id or f"[yellow]missing ({CHANNEL_ENV_VAR})[/yellow]",
        )
        table.add_row("Timeout", f"{config_obj.slack.timeout:g}s")

        now = datetime.now(UTC)
        for schedule in config_obj.schedules:
            next_fire = calculators[schedule.name].next_after(now)
            next_str = next_fire.strftime("%Y-%m-%d %H:%M UTC") if next_fire else "never"
            table.add_row(
                f"Schedule '{schedule.name}'",
                f"{schedule.cron} (next {next_str})",
            )
        console.print(table)

        try:
            config_obj.require_credentials()
        except ConfigError as e:
            error(str(e))
            raise typer.Exit(1) from None
        success("Configuration is valid")
