"""serve command: run the re-check server in the foreground."""

import click
import uvicorn

from repohint.cli.commands._config import load_cli_config
from repohint.main import create_app


@click.command("serve")
@click.option("--host", default="0.0.0.0", show_default=True, help="Interface to bind.")
@click.option("--port", type=int, default=None, help="Port to bind. Defaults to SERVER_PORT.")
@click.pass_context
def serve_cmd(ctx: click.Context, host: str, port: int | None):
    """Serve the signed re-check endpoint for failed criterion checks."""
    config = load_cli_config(ctx, require_server=True)
    app = create_app(config)
    uvicorn.run(app, host=host, port=port or config.server.server_port, log_level=config.logging.level.lower())
