"""init command: interactive setup wizard.

Writes ``config.json`` into the configuration directory and scaffolds a
``repohint_rules`` package next to it, where the repository keeps its own
rules. The built-in rules stay enabled; the scaffolded module is appended to
the code rules so new rules are picked up without editing the config again.
"""

import json
import re
import secrets
from pathlib import Path

import click
from rich.console import Console

from repohint.cli.commands._config import config_directory
from repohint.core.config import CONFIG_FILE_NAME
from repohint.core.config.rules_config import DEFAULT_CODE_RULES, DEFAULT_CRITERION_RULES, DEFAULT_PREPROCESSORS

console = Console()

RULES_PACKAGE = "repohint_rules"
REPO_PATTERN = re.compile(r"^[\w.-]+/[\w.-]+$")

_RULES_TEMPLATE = '''\
"""Repository specific rules.

Every rule receives the pull request context and returns a RuleOutcome.
List the rules in RULES; the module is loaded as a code rule module.
"""

from repohint.core.models import PRField
from repohint.rules import RuleOutcome, rule


@rule("no-empty-description")
async def check_description(pr) -> RuleOutcome:
    description = await pr.get(PRField.DESCRIPTION)
    if description and description.strip():
        return RuleOutcome()
    return RuleOutcome(comments="Please describe what this PR changes.\\n", passed=False)


RULES = [check_description]
'''


def _validate_repo(value: str) -> str:
    if not REPO_PATTERN.match(value):
        raise click.BadParameter("Invalid repository, expected owner/name")
    return value


def build_config(repo: str, token: str, host: str, protocol: str, port: str, server_port: int) -> dict:
    return {
        "REPO": repo,
        "USER_AGENT": repo.split("/")[1],
        "TOKEN": token,
        "SECRET_KEY": secrets.token_hex(32),
        "HOST": host,
        "PROTOCOL": protocol,
        "PORT": port,
        "SERVER_PORT": server_port,
        "RULES": {
            "PREPROCESSORS": list(DEFAULT_PREPROCESSORS),
            "CODE_RULES": [*DEFAULT_CODE_RULES, f"{RULES_PACKAGE}.rules"],
            "CRITERION_RULES": list(DEFAULT_CRITERION_RULES),
        },
    }


def _write_rules_package(directory: Path) -> None:
    package = directory / RULES_PACKAGE
    package.mkdir()
    (package / "__init__.py").write_text("", encoding="utf-8")
    (package / "rules.py").write_text(_RULES_TEMPLATE, encoding="utf-8")


@click.command("init")
@click.pass_context
def init_cmd(ctx: click.Context):
    """Interactive setup: write config.json and a rules package."""
    directory = config_directory(ctx.obj["config_path"])
    console.print("[bold]repohint setup[/bold]\n")

    repo = click.prompt(
        "GitHub repository (owner/name)", default="repo-hint/repo-hint", value_proc=_validate_repo
    )
    token = click.prompt("GitHub personal access token", hide_input=True)
    host = click.prompt("Public hostname of the re-check server", default="www.example.com")
    protocol = click.prompt("Protocol", type=click.Choice(["http", "https"]), default="http")
    port = click.prompt("Public port", default="80")
    server_port = click.prompt("Local port the server listens on", type=int, default=8100)

    config = build_config(repo, token, host, protocol, port, server_port)
    shown = {**config, "TOKEN": "***", "SECRET_KEY": "***"}
    console.print_json(data=shown)

    if not click.confirm("Is this ok?", default=True):
        console.print("[yellow]Aborted, nothing written.[/yellow]")
        return

    if (directory / RULES_PACKAGE).exists():
        console.print(f"[red]{directory / RULES_PACKAGE} already exists.[/red]")
        ctx.exit(1)

    directory.mkdir(parents=True, exist_ok=True)
    _write_rules_package(directory)
    (directory / CONFIG_FILE_NAME).write_text(json.dumps(config, indent=2), encoding="utf-8")
    console.print(f"[green]Created {directory / CONFIG_FILE_NAME} and {directory / RULES_PACKAGE}/[/green]")

    console.print("\n[bold green]Setup complete![/bold green]")
    console.print(f"Start the re-check server with: [bold]repohint -c {directory.resolve()} serve[/bold]")
    console.print("The configuration can be edited at any time; restart the server afterwards.")
