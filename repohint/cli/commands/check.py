"""exec command: check one pull request, usually from a CI job."""

import asyncio
import os
from collections.abc import Mapping
from typing import Any

import click
from rich.console import Console

from repohint.checks import CheckReport, create_pr_check
from repohint.cli.commands._config import load_cli_config
from repohint.core.config import Config

console = Console()

# Variables exported by the Jenkins GitHub pull request builder.
GHPRB_VARIABLES = ("ghprbPullId", "sha1", "ghprbPullAuthorLogin", "ghprbPullTitle", "ghprbPullLongDescription")
PR_REF_MARKER = "origin/pr"


def resolve_trigger(args: tuple[str, ...], environ: Mapping[str, str]) -> dict[str, Any]:
    """Positional arguments win over the ghprb variables; files only come from arguments."""
    files = None
    if args:
        values = list(args[:5]) + [None] * max(0, 5 - len(args))
        files = list(args[5:]) or None
    else:
        values = [environ.get(name) for name in GHPRB_VARIABLES]

    number, sha1, author, title, description = values
    return {
        "number": number,
        "sha1": sha1,
        "author": author,
        "title": title,
        "description": description,
        "files": files,
    }


def is_pull_request_ref(sha1: str | None) -> bool:
    """A build without sha1 is trusted; otherwise it must come from a PR ref."""
    return not sha1 or PR_REF_MARKER in sha1


async def _run_check(config: Config, trigger: dict[str, Any]) -> CheckReport:
    checker = create_pr_check(config)
    initial_data = {key: trigger[key] for key in ("author", "title", "description", "files")}
    try:
        return await checker.run(trigger["number"], initial_data)
    finally:
        await checker.client.close()


def _print_report(report: CheckReport) -> None:
    for label, phase in (("Code rules", report.code_rules), ("Criterion rules", report.criterion_rules)):
        if phase is None:
            continue
        verdict = "[green]passed[/green]" if phase.passed else "[red]failed[/red]"
        console.print(f"{label}: {verdict} ({len(phase.comments)} comment(s))")


@click.command("exec")
@click.argument("args", nargs=-1)
@click.option("--strict", is_flag=True, help="Exit with status 2 when a rule fails.")
@click.pass_context
def exec_cmd(ctx: click.Context, args: tuple[str, ...], strict: bool):
    """Check a pull request.

    ARGS are PR SHA1 AUTHOR TITLE DESCRIPTION [FILES...]; without them the
    ghprb environment variables are used.
    """
    trigger = resolve_trigger(args, os.environ)
    if not trigger["number"]:
        raise click.UsageError("A pull request number is required (argument or ghprbPullId).")

    if not is_pull_request_ref(trigger["sha1"]):
        console.print(f"[yellow]Skipping: {trigger['sha1']} is not a pull request ref.[/yellow]")
        return

    config = load_cli_config(ctx)

    console.print(f"Checking [bold]{config.github.repo}#{trigger['number']}[/bold]")
    try:
        report = asyncio.run(_run_check(config, trigger))
    except Exception as e:
        console.print(f"[red]Check failed: {e}[/red]")
        ctx.exit(1)

    _print_report(report)
    if strict and not report.passed:
        ctx.exit(2)
