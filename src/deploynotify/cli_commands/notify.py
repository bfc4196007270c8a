import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Iterable, List, Optional

import typer
from yaspin import yaspin

from deploynotify.core.enum import NotificationOutcome
from deploynotify.core.stream import LogStream, parse_log_entry
from deploynotify.messages import notify as msg
from deploynotify.notifications.errors import NotFoundError, RenderError
from deploynotify.utils.dependencies import ConfigOption, build_dispatcher, get_config

logger = logging.getLogger(__name__)


def feed_stream(lines: Iterable[str], stream: LogStream) -> Optional[Exception]:
    """Put every parseable line on ``stream`` and close it at the end.

    Returns:
        The error that stopped reading, or None once the input is exhausted
    """
    try:
        for line in lines:
            line = line.strip()
            if not line:
                continue
            try:
                entry = parse_log_entry(line)
            except ValueError as e:
                logger.warning(msg.IGNORING_MALFORMED_ENTRY, line, e)
                continue
            stream.put(entry)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(msg.COULD_NOT_READ_STREAM, e)
        return e
    finally:
        stream.close()
    return None


def register(app: typer.Typer) -> Dict[str, Callable[..., Any]]:
    @app.command()
    def listen(
        input_file: typer.FileText = typer.Option(
            "-",
            "--input",
            "-i",
            encoding="utf-8",
            help="File with one JSON log entry per line (default: stdin)",
        ),
        config_file: ConfigOption = None,
    ):
        """Send a notification for every finished deployment in a log stream."""
        config = get_config(config_file)
        stream = LogStream()
        read_errors: List[Optional[Exception]] = []

        with ThreadPoolExecutor(
            max_workers=config.notifier.max_workers, thread_name_prefix="deploynotify"
        ) as executor:
            dispatcher = build_dispatcher(config, executor)
            reader = threading.Thread(
                target=lambda: read_errors.append(feed_stream(input_file, stream)),
                name="deploynotify-reader",
                daemon=True,
            )
            reader.start()
            dispatched = dispatcher.listen(stream)
            reader.join()

        read_error = read_errors[0] if read_errors else None
        if read_error is not None:
            typer.secho(msg.COULD_NOT_READ_INPUT.format(read_error), fg=typer.colors.RED)
            raise typer.Exit(code=1)

        typer.secho(f"✔ {dispatched} notification(s) dispatched", fg=typer.colors.GREEN)

    @app.command()
    def notify(
        deployment_id: int,
        failed: bool = typer.Option(False, "--failed", help="Report the deployment as failed"),
        config_file: ConfigOption = None,
    ):
        """Send the notification for a single deployment and wait for the result."""
        config = get_config(config_file)
        dispatcher = build_dispatcher(config)

        with yaspin(text="Sending notification...", color="green") as spinner:
            outcome = dispatcher.notify(deployment_id, success=not failed)
            if outcome in (NotificationOutcome.DELIVERED, NotificationOutcome.DISABLED):
                spinner.ok("✔")
            else:
                spinner.fail("✘")

        if outcome == NotificationOutcome.DELIVERED:
            typer.secho(msg.NOTIFICATION_SENT.format(deployment_id), fg=typer.colors.GREEN)
            raise typer.Exit(code=0)
        if outcome == NotificationOutcome.DISABLED:
            typer.secho(msg.NOTIFICATION_SKIPPED.format(deployment_id), fg=typer.colors.YELLOW)
            raise typer.Exit(code=0)

        typer.secho(
            msg.NOTIFICATION_NOT_SENT.format(deployment_id, outcome.value), fg=typer.colors.RED
        )
        raise typer.Exit(code=1)

    @app.command()
    def render(
        deployment_id: int,
        failed: bool = typer.Option(False, "--failed", help="Render the failure summary"),
        config_file: ConfigOption = None,
    ):
        """Print the summary of a deployment without sending it."""
        config = get_config(config_file)
        dispatcher = build_dispatcher(config)

        try:
            resolved = dispatcher.resolver.resolve(deployment_id, skip_disabled=False)
            summary = dispatcher.renderer.render(
                resolved.deployment, resolved.application, resolved.user, not failed
            )
        except (NotFoundError, RenderError) as e:
            typer.secho(f"✘ {e}", fg=typer.colors.RED)
            raise typer.Exit(code=1)

        typer.echo(summary)

    return {
        "listen": listen,
        "notify": notify,
        "render": render,
    }
