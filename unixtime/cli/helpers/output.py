"""Output formatting and display utilities."""
import sys
from datetime import datetime, timezone

from rich.console import Console
from rich.panel import Panel

from unixtime.utils.exceptions import UnixTimeException, TransportError, ValidationError
from . import get_panel_box, CONSOLE_WIDTH


def format_unix_time(unix_time: int) -> str:
    """Format a Unix timestamp as an ISO 8601 UTC string."""
    return datetime.fromtimestamp(unix_time, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class OutputHelper:
    """Output formatting and display utilities."""

    # Ensure stdout uses UTF-8 encoding
    if hasattr(sys.stdout, 'reconfigure'):
        sys.stdout.reconfigure(encoding='utf-8', errors='replace')

    _console = Console()
    PANEL_WIDTH = None

    @staticmethod
    def _get_panel_width():
        """Get panel width."""
        if OutputHelper.PANEL_WIDTH is None:
            OutputHelper.PANEL_WIDTH = CONSOLE_WIDTH
        return OutputHelper.PANEL_WIDTH

    @staticmethod
    def print_panel(content: str, title: str = "", border_style: str = "blue"):
        """Print content in a rich panel box."""
        width = OutputHelper._get_panel_width()
        OutputHelper._console.print(Panel(content, title=title, title_align="left", border_style=border_style, box=get_panel_box(), expand=True, width=width))

    @staticmethod
    def print_time(unix_time: int, server: str, title: str = "Time"):
        """Print a received Unix time with its UTC rendering."""
        OutputHelper.print_panel(
            f"Server: [bright_cyan]{server}[/bright_cyan]\n"
            f"Unix time: [bright_green]{unix_time}[/bright_green]\n"
            f"UTC: [bright_green]{format_unix_time(unix_time)}[/bright_green]",
            title=title,
            border_style="green"
        )

    @staticmethod
    def handle_error(error: Exception, context: str = "Error") -> bool:
        """
        Handle common errors with user-friendly messages.

        Args:
            error: The exception to handle
            context: Context string for the error (e.g., "Configuration")

        Returns:
            True if error was handled, False if it should be re-raised
        """
        if isinstance(error, ValidationError):
            OutputHelper.print_panel(
                f"{error.message}\n\n"
                "Check the command options and the [bright_cyan].unixtime[/bright_cyan] file.",
                title=f"{context}: Invalid Setting",
                border_style="red"
            )
            return True
        if isinstance(error, TransportError):
            OutputHelper.print_panel(
                f"{error.message}",
                title=f"{context}: Transport",
                border_style="red"
            )
            return True
        if isinstance(error, UnixTimeException):
            OutputHelper.print_panel(error.message, title=context, border_style="red")
            return True

        return False
