"""
Client construction utilities for CLI commands.

- Settings resolution and validation
- Opening the local UDP port
- Error reporting for settings and transport failures
"""

from contextlib import contextmanager

import typer

from unixtime.client import NtpTimeClient
from unixtime.transport import create_transport
from unixtime.utils.exceptions import UnixTimeException, TransportError
from .helpers import OutputHelper
from .config import ClientSettings, resolve_settings


def _create_client(settings: ClientSettings) -> NtpTimeClient:
    return NtpTimeClient(
        create_transport(settings.bind),
        time_server=settings.server,
        local_port=settings.local_port,
        poll_interval_ms=settings.poll_interval_ms,
        max_polls=settings.max_polls,
    )


@contextmanager
def _open_client(settings: ClientSettings):
    """Yield a client whose local port is open; always released on exit."""
    client = _create_client(settings)
    try:
        if not client.begin():
            raise TransportError(
                f"Cannot open local UDP port {settings.local_port}.\n"
                "Port 123 usually needs elevated privileges; "
                "try [bright_blue]--local-port 0[/bright_blue] for any free port."
            )
        yield client
    finally:
        client.stop()


def _resolve_or_exit(context: str, **overrides) -> ClientSettings:
    try:
        return resolve_settings(**overrides)
    except UnixTimeException as e:
        _handle_client_error(e, context)


def _handle_client_error(e: Exception, context: str):
    """Print a panel for a known error and exit with status 1."""
    if not OutputHelper.handle_error(e, context):
        raise e
    raise typer.Exit(1)
