import sys
from typing import Optional

import typer

from unixtime import __version__
from .helpers.output import OutputHelper
from .config import GLOBAL_OPTIONS


app = typer.Typer(
    rich_markup_mode="rich",
    add_completion=False,
    no_args_is_help=False,
    pretty_exceptions_show_locals=False,
    pretty_exceptions_enable=False,
    help="Fetch the time from an NTP server as a Unix timestamp."
)


def _print_main_help():
    lines = []
    lines.append("[bold]Minimal NTP client[/bold]")
    lines.append("[dim]Ask a time server for the current time, rounded to the second[/dim]")
    lines.append("")
    lines.append("[bold cyan]Usage:[/bold cyan]")
    lines.append("  unixtime [yellow][OPTIONS][/yellow] [green]COMMAND[/green] [[dim]ARGS[/dim]]...")
    lines.append("")
    lines.append("[bold cyan]Global Options:[/bold cyan]")
    lines.append("  [yellow]-s, --server[/yellow] [cyan]HOST[/cyan]        Time server [dim](pool.ntp.org)[/dim]")
    lines.append("  [yellow]-l, --local-port[/yellow] [cyan]PORT[/cyan]    Local UDP port [dim](123, 0 = any)[/dim]")
    lines.append("  [yellow]--poll-interval[/yellow] [cyan]MS[/cyan]      Delay between polls [dim](150)[/dim]")
    lines.append("  [yellow]--max-polls[/yellow] [cyan]N[/cyan]            Polls before giving up [dim](15)[/dim]")
    lines.append("  [yellow]--bind[/yellow] [cyan]ADDR[/cyan]              Local address to bind")
    lines.append("")
    lines.append("[bold cyan]Commands:[/bold cyan]")
    for cmd, desc in (
        ("get", "Request the time and wait for the answer"),
        ("watch", "Request the time and poll for it without blocking"),
        ("config", "Show or save default settings in .unixtime"),
        ("version", "Show version"),
    ):
        lines.append(f"  [green]{cmd:<10}[/green]{desc}")
    OutputHelper.print_panel("\n".join(lines), title="unixtime", border_style="dim")


@app.callback(invoke_without_command=True)
def cli(
    ctx: typer.Context,
    server: Optional[str] = typer.Option(None, "--server", "-s", help="NTP server host"),
    local_port: Optional[int] = typer.Option(None, "--local-port", "-l", help="Local UDP port (0 = any free port)"),
    poll_interval: Optional[int] = typer.Option(None, "--poll-interval", help="Poll interval in ms"),
    max_polls: Optional[int] = typer.Option(None, "--max-polls", help="Polls before giving up"),
    bind: Optional[str] = typer.Option(None, "--bind", help="Local address to bind"),
):
    """
    Fetch the time from an NTP server as a Unix timestamp.
    """

    # Store global options in module-level storage for access by all commands
    GLOBAL_OPTIONS.clear()
    GLOBAL_OPTIONS.set(
        server=server,
        local_port=local_port,
        poll_interval_ms=poll_interval,
        max_polls=max_polls,
        bind=bind,
    )

    if ctx.invoked_subcommand is None:
        _print_main_help()
        raise typer.Exit()


# =============================================================================
# Import all commands to register them with the app
# =============================================================================
from .commands import sync, utility

# These imports are for side-effect (command registration)
_command_modules = (sync, utility)


# =============================================================================
# Main Entry Point
# =============================================================================

def main():
    # Handle -v / --version
    if len(sys.argv) == 2 and sys.argv[1] in ('--version', '-v'):
        OutputHelper.print_panel(
            f"[bright_blue]unixtime[/bright_blue] version [bright_green]{__version__}[/bright_green]",
            title="Version",
            border_style="green"
        )
        sys.exit(0)

    app()
