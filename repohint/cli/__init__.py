"""CLI entry point for repohint.

Commands:
  exec   check one pull request (CI trigger, ghprb variables as fallback)
  bot    small GitHub API helpers for the configured repository
  serve  run the re-check server in the foreground
  init   interactive setup wizard writing config.json
"""

import click

from repohint import __version__
from repohint.cli.commands.bot import bot_cmd
from repohint.cli.commands.check import exec_cmd
from repohint.cli.commands.init import init_cmd
from repohint.cli.commands.serve import serve_cmd


@click.group()
@click.version_option(version=__version__, prog_name="repohint")
@click.option(
    "--config",
    "-c",
    "config_path",
    default=".",
    show_default=True,
    help="Directory holding config.json (or the path of the file itself).",
    envvar="REPOHINT_CONFIG",
)
@click.pass_context
def main(ctx: click.Context, config_path: str):
    """Rule-driven pull request checks for a GitHub repository."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(exec_cmd)
main.add_command(bot_cmd)
main.add_command(serve_cmd)
main.add_command(init_cmd)
