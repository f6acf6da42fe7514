"""Configuration loading shared by the commands that talk to GitHub."""

from pathlib import Path

import click
from rich.console import Console

from repohint.core.config import CONFIG_FILE_NAME, Config, load_config
from repohint.core.errors import ConfigurationError
from repohint.core.utils.logging import configure_logging

console = Console(stderr=True)


def config_directory(config_path: str) -> Path:
    """Accept either the configuration directory or the config.json path."""
    path = Path(config_path)
    if path.name == CONFIG_FILE_NAME or path.suffix == ".json":
        return path.parent
    return path


def load_cli_config(ctx: click.Context, require_server: bool = False) -> Config:
    """Load, validate and apply the logging settings; exit 1 on bad configuration."""
    directory = config_directory(ctx.obj["config_path"])
    try:
        config = load_config(directory, require_server=require_server)
    except ConfigurationError as e:
        console.print("[red]Configuration error:[/red]")
        for error in e.errors:
            console.print(f"  - {error}")
        ctx.exit(1)
    configure_logging(config.logging)
    return config
