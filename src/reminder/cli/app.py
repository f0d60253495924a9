"""Main CLI application."""

import typer

from reminder.cli.commands import config, send, serve, upcoming

app = typer.Typer(
    name="reminder",
    help="Slack reminder bot - posts messages on a weekly schedule",
    no_args_is_help=True,
)

config.register(app)
send.register(app)
serve.register(app)
upcoming.register(app)


if __name__ == "__main__":
    app()
