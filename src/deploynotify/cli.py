"""Command-line interface for deploynotify."""

import typer

from deploynotify.cli_commands import config_cmd, notify
from deploynotify.utils.dependencies import configure_logging

app = typer.Typer(help="deploynotify CLI: post deployment summaries to chat webhooks.")


@app.callback()
def main(
    log_level: str = typer.Option("INFO", "--log-level", "-l", help="Logging level"),
):
    configure_logging(log_level)


notify.register(app)
config_cmd.register(app)


if __name__ == "__main__":
    app()
