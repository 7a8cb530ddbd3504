import os
from dataclasses import asdict

import typer

from unixtime import __version__
from ..helpers import OutputHelper
from ..config import ConfigManager, CONFIG_FILE_NAME
from ..connection import _resolve_or_exit
from ..app import app


@app.command(name="version", rich_help_panel="Utility")
def version_cmd():
    """
    Show version.
    """
    OutputHelper.print_panel(
        f"[bright_blue]unixtime[/bright_blue] version [bright_green]{__version__}[/bright_green]",
        title="Version",
        border_style="green"
    )


@app.command(name="config", rich_help_panel="Utility")
def config_cmd(
    save: bool = typer.Option(False, "--save", help="Write the effective settings to .unixtime"),
):
    """
    Show or save default settings in .unixtime.
    """
    settings = _resolve_or_exit("Config")
    config_path = ConfigManager.find_config_file()

    if save:
        if config_path is None:
            config_path = os.path.join(os.getcwd(), CONFIG_FILE_NAME)
        ConfigManager.update(config_path, **asdict(settings))

    lines = [
        f"Server:        [bright_cyan]{settings.server}[/bright_cyan]",
        f"Local port:    {settings.local_port}",
        f"Poll interval: {settings.poll_interval_ms} ms",
        f"Max polls:     {settings.max_polls}",
        f"Bind:          {settings.bind or '[dim]all interfaces[/dim]'}",
        "",
        f"[dim]Config file: {config_path or 'none'}[/dim]",
    ]
    OutputHelper.print_panel(
        "\n".join(lines),
        title="Saved Settings" if save else "Settings",
        border_style="green" if save else "blue"
    )
