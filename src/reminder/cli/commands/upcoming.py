"""Preview upcoming occurrences of a recurrence expression."""

from datetime import datetime
from typing import Annotated

import typer

from reminder.cli.console import console, create_table, error, warning


def register(app: typer.Typer) -> None:
    """Register the upcoming command."""

    @app.command()
    def upcoming(
        expression: Annotated[
            str,
            typer.Argument(help="Six-field cron expression, e.g. '0 0 14 * * SUN'"),
        ],
        count: Annotated[
            int,
            typer.Option(
                "--count",
                "-n",
                min=1,
                help="Number of occurrences to show",
            ),
        ] = 5,
        after: Annotated[
            str | None,
            typer.Option(
                "--after",
                help="Reference time (ISO 8601, UTC if no offset); defaults to now",
            ),
        ] = None,
    ) -> None:
        """Show the next occurrences of a schedule."""
        from reminder.scheduling import RecurrenceCalculator, RecurrenceParseError

        reference: datetime | None = None
        if after is not None:
            try:
                reference = datetime.fromisoformat(after)
            except ValueError:
                error(f"Invalid --after value: {after}")
                raise typer.Exit(1) from None

        try:
            calculator = RecurrenceCalculator.parse(expression)
        except RecurrenceParseError as e:
            error(str(e))
            raise typer.Exit(1) from None

        occurrences = calculator.preview(count, reference)
        if not occurrences:
            warning("No upcoming occurrences")
            raise typer.Exit(1)

        table = create_table(
            f"Upcoming: {calculator.expression}",
            [("#", "dim"), ("UTC", "cyan"), ("Weekday", "green")],
        )
        for index, occurrence in enumerate(occurrences, start=1):
            table.add_row(str(index), occurrence.isoformat(), occurrence.strftime("%A"))
        console.print(table)
