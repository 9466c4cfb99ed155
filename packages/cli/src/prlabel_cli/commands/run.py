"""run command — the GitHub Actions step that sets or removes the label."""

from __future__ import annotations

from typing import NoReturn

import click
from github import GithubException
from rich.console import Console

from prlabel_core.actions import annotate, write_outputs
from prlabel_core.context import MISSING_PR_NUMBER_WARNING, load_event_payload, resolve_pull_request_number
from prlabel_core.gh.pull_request import error_message
from prlabel_core.labeler import run_labeler

console = Console()


def _fail(message: str) -> NoReturn:
    annotate("error", message)
    raise click.ClickException(message)


def _banner(config: dict) -> str:
    pr_number = config["pull_request_number"]
    return (
        "\n############### Set Label When Approved Begin ##################\n"
        f'label: "{config["label"] or "not set"}"\n'
        f"requireCommittersApproval: {str(config['require_committers_approval']).lower()}\n"
        f"removeLabelWhenApprovalMissing: {str(config['remove_label_when_approval_missing']).lower()}\n"
        f"comment: {config['comment']}\n"
        f"pullRequestNumber: {pr_number if pr_number is not None else 'not set'}\n"
        f"numOfApprovals: {config['num_of_approvals']}\n"
    )


@click.command("run")
@click.option("--repo", default=None, help="GitHub repository in owner/name format. Defaults to $GITHUB_REPOSITORY.")
@click.option("--event-name", default=None, help="Triggering event name. Defaults to $GITHUB_EVENT_NAME.")
@click.option("--event-path", default=None, help="Path to the event payload JSON. Defaults to $GITHUB_EVENT_PATH.")
@click.option(
    "--pr",
    "pr_number",
    type=int,
    default=None,
    help="Pull request number. Required when triggered by workflow_run.",
)
@click.option("--label", default=None, help="Label to set once the PR is approved.")
@click.option("--comment", default=None, help="Comment to post when the label is set.")
@click.option(
    "--num-approvals",
    "num_of_approvals",
    type=click.IntRange(min=1),
    default=None,
    help="Number of approving reviews required.",
)
@click.option(
    "--require-committers-approval/--no-require-committers-approval",
    default=None,
    help="Only count reviews from users with write or admin permission.",
)
@click.option(
    "--remove-label-when-approval-missing/--no-remove-label-when-approval-missing",
    default=None,
    help="Remove the label again when the PR is no longer approved.",
)
@click.option("--dry-run", is_flag=True, help="Compute the decision without changing the PR.")
@click.pass_context
def run_cmd(
    ctx,
    repo: str | None,
    event_name: str | None,
    event_path: str | None,
    pr_number: int | None,
    label: str | None,
    comment: str | None,
    num_of_approvals: int | None,
    require_committers_approval: bool | None,
    remove_label_when_approval_missing: bool | None,
    dry_run: bool,
):
    """Set the approval label on a pull request once it is approved.

    Meant to run as a step of a workflow triggered by pull_request_review
    or workflow_run. Settings come from .prlabel.yml, the action inputs
    (INPUT_* variables) and the options above, in increasing precedence.

    \b
    Outputs written to $GITHUB_OUTPUT:
      isApproved            true when enough reviewers approved
      shouldLabelBeSet      true when the label was (or would be) added
      shouldLabelBeRemoved  true when the label was (or would be) removed
    """
    from prlabel_core.config import get_required_env, load_config
    from prlabel_cli.auth import resolve_github_token

    config_path = ctx.obj.get("config_path", ".prlabel.yml") if ctx.obj else ".prlabel.yml"
    try:
        config = load_config(
            config_path,
            cli_overrides={
                "label": label,
                "comment": comment,
                "num_of_approvals": num_of_approvals,
                "pull_request_number": pr_number,
                "require_committers_approval": require_committers_approval,
                "remove_label_when_approval_missing": remove_label_when_approval_missing,
            },
        )
    except ValueError as e:
        _fail(str(e))

    token = resolve_github_token()
    if not token:
        annotate("error", "No GitHub token found.")
        raise click.UsageError("No GitHub token found. Pass the action's token input or set GITHUB_TOKEN.")
    config["github_token"] = token

    try:
        repository = repo or get_required_env("GITHUB_REPOSITORY")
        event_name = event_name or get_required_env("GITHUB_EVENT_NAME")

        console.print(_banner(config), markup=False)

        payload = load_event_payload(event_path or config["github_event_path"])
        resolved_number = resolve_pull_request_number(event_name, payload, config["pull_request_number"])
    except ValueError as e:
        _fail(str(e))

    if resolved_number is None:
        annotate("warning", MISSING_PR_NUMBER_WARNING)
    else:
        try:
            result = run_labeler(repository, resolved_number, config, dry_run=dry_run)
        except (ValueError, GithubException) as e:
            _fail(error_message(e))
        except Exception as e:
            _fail(str(e))
        write_outputs(result.outputs(), config["github_output"])

    console.print("\n############### Set Label When Approved End ##################\n", markup=False)
