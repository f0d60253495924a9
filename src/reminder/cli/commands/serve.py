"""Server command for running the reminder schedules."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer

from reminder.cli.console import error

logger = logging.getLogger(__name__)


def register(app: typer.Typer) -> None:
    """Register the serve command."""

    @app.command()
    def serve(
        config: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="Path to configuration file",
            ),
        ] = None,
        log_level: Annotated[
            str | None,
            typer.Option(
                "--log-level",
                "-l",
                help="Log level (DEBUG, INFO, WARNING, ERROR)",
            ),
        ] = None,
    ) -> None:
        """Run all reminder schedules until terminated."""
        from reminder.config import ConfigError, load_config
        from reminder.logging import configure_logging
        from reminder.scheduling import RecurrenceParseError
        from reminder.service import run_service

        configure_logging(level=log_level, use_rich=True)

        try:
            reminder_config = load_config(config)
            asyncio.run(run_service(reminder_config))
        except (ConfigError, RecurrenceParseError) as e:
            error(str(e))
            raise typer.Exit(1) from None
        except KeyboardInterrupt:
            # Use print here since logging may already be torn down
            print("\nReminder bot stopped")
