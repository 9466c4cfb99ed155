"""status command — show how a pull request's reviews are counted."""

from __future__ import annotations

import click
from github import GithubException
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from prlabel_core.approval import APPROVED
from prlabel_core.gh.pull_request import error_message
from prlabel_core.labeler import run_labeler

console = Console()


@click.command("status")
@click.option("--repo", required=True, help="GitHub repository (owner/name).")
@click.option("--pr", "pr_number", type=int, required=True, help="Pull request number.")
@click.option(
    "--num-approvals",
    "num_of_approvals",
    type=click.IntRange(min=1),
    default=None,
    help="Number of approving reviews required. Overrides config file.",
)
@click.option(
    "--require-committers-approval/--no-require-committers-approval",
    default=None,
    help="Only count reviews from users with write or admin permission.",
)
@click.pass_context
def status_cmd(
    ctx,
    repo: str,
    pr_number: int,
    num_of_approvals: int | None,
    require_committers_approval: bool | None,
):
    """Evaluate a pull request's reviews without changing it.

    Uses the same settings as `prlabel run` and prints every counted
    reviewer's latest state along with the resulting decision.
    """
    from prlabel_core.config import load_config
    from prlabel_cli.auth import resolve_github_token

    config_path = ctx.obj.get("config_path", ".prlabel.yml") if ctx.obj else ".prlabel.yml"
    try:
        config = load_config(
            config_path,
            cli_overrides={
                "num_of_approvals": num_of_approvals,
                "require_committers_approval": require_committers_approval,
            },
        )
    except ValueError as e:
        raise click.ClickException(str(e))

    token = resolve_github_token()
    if not token:
        raise click.UsageError("No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.")
    config["github_token"] = token

    try:
        result = run_labeler(repo, pr_number, config, dry_run=True)
    except (ValueError, GithubException) as e:
        raise click.ClickException(error_message(e))
    except Exception as e:
        raise click.ClickException(str(e))

    if not result.review_states:
        console.print("[yellow]No counted reviews found.[/yellow]")
    else:
        table = Table(title=f"Reviews — {repo}#{result.pr_number}", show_header=True, header_style="bold cyan")
        table.add_column("Reviewer", style="bold")
        table.add_column("State", width=18)

        for login, state in result.review_states.items():
            state_style = "green" if state == APPROVED else "red"
            table.add_row(escape(login), f"[{state_style}]{state}[/{state_style}]")

        console.print(table)

    needed = config["num_of_approvals"]
    console.print(
        f"Approvals: [bold]{len(result.approved_by)}[/bold]/{needed}  ·  "
        f"Changes requested: [bold]{len(result.changes_requested_by)}[/bold]"
    )
    if result.is_approved:
        console.print("[bold green]Approved.[/bold green]")
    else:
        console.print("[bold red]Not approved.[/bold red]")
