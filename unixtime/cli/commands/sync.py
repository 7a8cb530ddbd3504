import time

import typer

from unixtime.utils.exceptions import UnixTimeException
from ..helpers import OutputHelper
from ..connection import _open_client, _resolve_or_exit, _handle_client_error
from ..app import app

# How often the watch loop looks at the socket between other work
WATCH_TICK = 0.01


def _print_no_response(server: str, waited_ms: int):
    OutputHelper.print_panel(
        f"No valid answer from [bright_cyan]{server}[/bright_cyan] within {waited_ms} ms.\n\n"
        "[dim]The server may be unreachable, or the reply was not a 48-byte NTP packet.[/dim]",
        title="No Response",
        border_style="red"
    )


@app.command(rich_help_panel="Time")
def get(
    raw: bool = typer.Option(False, "--raw", help="Print only the Unix timestamp"),
):
    """
    Request the time and wait for the answer.
    """
    settings = _resolve_or_exit("Get Time")

    try:
        with _open_client(settings) as client:
            unix_time = client.get_unix_time()
    except UnixTimeException as e:
        _handle_client_error(e, "Get Time")

    if unix_time is None:
        _print_no_response(settings.server, settings.max_polls * settings.poll_interval_ms)
        raise typer.Exit(1)

    if raw:
        typer.echo(unix_time)
    else:
        OutputHelper.print_time(unix_time, settings.server)


@app.command(rich_help_panel="Time")
def watch(
    count: int = typer.Option(1, "--count", "-n", min=1, help="Number of requests"),
    interval: float = typer.Option(1.0, "--interval", "-i", min=0.0, help="Seconds between requests"),
):
    """
    Request the time and poll for it without blocking.
    """
    settings = _resolve_or_exit("Watch")
    budget = settings.max_polls * settings.poll_interval_ms / 1000
    failures = 0

    try:
        with _open_client(settings) as client:
            for i in range(count):
                if i:
                    time.sleep(interval)

                title = f"Time {i + 1}/{count}"
                if not client.request_time():
                    OutputHelper.print_panel(
                        f"Could not send a request to [bright_cyan]{settings.server}[/bright_cyan].",
                        title=title,
                        border_style="red"
                    )
                    failures += 1
                    continue

                unix_time = None
                deadline = time.monotonic() + budget
                while time.monotonic() < deadline:
                    unix_time = client.poll_and_extract()
                    if unix_time is not None:
                        break
                    time.sleep(WATCH_TICK)

                if unix_time is None:
                    _print_no_response(settings.server, int(budget * 1000))
                    failures += 1
                else:
                    OutputHelper.print_time(unix_time, settings.server, title=title)
    except UnixTimeException as e:
        _handle_client_error(e, "Watch")

    if failures:
        raise typer.Exit(1)
