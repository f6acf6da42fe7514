"""bot command: GitHub API helpers for the configured repository."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import click
from rich.console import Console

from repohint.cli.commands._config import load_cli_config
from repohint.integrations.github.api import GitHubClient

console = Console()

BOT_COMMANDS_HELP = """\
  comment:list   PR
  comment:add    PR CONTENT
  comment:delete COMMENT_ID
  pr:info        PR
  pr:review      PR
  pr:review:add  PR CONTENT [EVENT]
  pr:file        PR
  pr:isMerged    PR
  pr:update      PR STATE {open | closed}
  pr:status      PR
  pr:status:set  PR STATE [CONTEXT] [TARGET_URL] [DESCRIPTION]
"""


def _summarize_pr_info(info: dict[str, Any]) -> dict[str, Any]:
    summary = {key: value for key, value in info.items() if key not in ("_links", "base", "head")}
    if isinstance(summary.get("user"), dict):
        summary["user"] = summary["user"].get("login")
    return summary


async def _pr_info(client: GitHubClient, number: str) -> dict[str, Any]:
    return _summarize_pr_info(await client.get_pr_info(number))


# name -> (minimum argument count, handler)
BOT_COMMANDS: dict[str, tuple[int, Callable[..., Awaitable[Any]]]] = {
    "comment:list": (1, lambda client, pr: client.get_pr_comments(pr)),
    "comment:add": (2, lambda client, pr, content: client.add_comment_on_pr(pr, content)),
    "comment:delete": (1, lambda client, comment_id: client.delete_comment(comment_id)),
    "pr:info": (1, _pr_info),
    "pr:review": (1, lambda client, pr: client.get_pr_reviews(pr)),
    "pr:review:add": (2, lambda client, pr, content, *event: client.create_pr_review(pr, content, *event)),
    "pr:file": (1, lambda client, pr: client.get_pr_files(pr)),
    "pr:isMerged": (1, lambda client, pr: client.get_pr_merge_status(pr)),
    "pr:update": (2, lambda client, pr, state: client.update_pr_state(pr, state)),
    "pr:status": (1, lambda client, pr: client.get_pr_status(pr)),
    "pr:status:set": (2, lambda client, pr, *status: client.set_pr_status(pr, *status)),
}


async def run_bot_command(client: GitHubClient, command: str, args: tuple[str, ...]) -> Any:
    _, handler = BOT_COMMANDS[command]
    try:
        return await handler(client, *args)
    finally:
        await client.close()


@click.command("bot", epilog="Commands:\n\n" + BOT_COMMANDS_HELP)
@click.argument("command")
@click.argument("args", nargs=-1)
@click.pass_context
def bot_cmd(ctx: click.Context, command: str, args: tuple[str, ...]):
    """Run a GitHub API helper COMMAND against the configured repository."""
    if command not in BOT_COMMANDS:
        console.print(f"[red]Unknown command: {command}[/red]\n")
        console.print(BOT_COMMANDS_HELP, markup=False)
        ctx.exit(2)

    minimum_args, _ = BOT_COMMANDS[command]
    if len(args) < minimum_args:
        raise click.UsageError(f"{command} expects at least {minimum_args} argument(s).")

    config = load_cli_config(ctx)
    client = GitHubClient(config.github)
    try:
        result = asyncio.run(run_bot_command(client, command, args))
    except (TypeError, ValueError) as e:
        raise click.UsageError(str(e)) from e
    except Exception as e:
        console.print(f"[red]{command} failed: {e}[/red]")
        ctx.exit(1)

    if result is not None:
        console.print_json(data=result)
