"""Core label orchestration: fetch reviews, decide, and update the PR."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from github import GithubException
from rich.console import Console
from rich.markup import escape

from prlabel_core.approval import APPROVED, CHANGES_REQUESTED, classify, decide
from prlabel_core.gh.pull_request import (
    add_comment,
    add_label,
    get_label_names,
    get_permission,
    get_pull,
    get_repo,
    get_reviews,
    remove_label,
)

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class LabelDecision:
    should_set: bool = False
    should_remove: bool = False


@dataclass
class LabelResult:
    """Outcome of a labeler run, rendered by the CLI as workflow outputs."""

    repo: str
    pr_number: int
    is_approved: bool
    should_label_be_set: bool = False
    should_label_be_removed: bool = False
    review_states: dict[str, str] = field(default_factory=dict)
    committers: list[str] = field(default_factory=list)

    @property
    def approved_by(self) -> list[str]:
        return [login for login, state in self.review_states.items() if state == APPROVED]

    @property
    def changes_requested_by(self) -> list[str]:
        return [login for login, state in self.review_states.items() if state == CHANGES_REQUESTED]

    def outputs(self) -> dict[str, str]:
        return {
            "isApproved": str(self.is_approved).lower(),
            "shouldLabelBeSet": str(self.should_label_be_set).lower(),
            "shouldLabelBeRemoved": str(self.should_label_be_removed).lower(),
        }


def decide_label_action(
    is_approved: bool,
    label_names: list[str],
    label: str | None,
    remove_when_missing: bool,
) -> LabelDecision:
    """Work out whether the label needs adding or removing.

    The two outcomes are mutually exclusive: setting requires an approved PR,
    removing requires an unapproved one. With no label configured nothing
    is ever touched.
    """
    if not label:
        return LabelDecision()
    present = label in label_names
    return LabelDecision(
        should_set=is_approved and not present,
        should_remove=not is_approved and present and remove_when_missing,
    )


def run_labeler(
    repo: str,
    pr_number: int,
    config: dict,
    dry_run: bool = False,
    repo_obj=None,
) -> LabelResult:
    """Evaluate a pull request's reviews and set or remove the approval label.

    GitHub API errors other than a missing PR propagate unchanged. With
    ``dry_run`` the decision is computed and reported but the PR is left
    untouched.
    """
    this_repo = repo_obj if repo_obj is not None else get_repo(repo, token=config["github_token"])

    try:
        this_pr = get_pull(this_repo, pr_number)
    except GithubException as e:
        if e.status == 404:
            raise ValueError(f"PR #{pr_number} not found in {repo}.")
        raise

    console.print("Grabbing labels")
    label_names = get_label_names(this_pr)

    console.print("Grabbing reviews")
    reviews = get_reviews(this_pr)
    logger.debug("Fetched %d review(s) for %s#%d", len(reviews), repo, this_pr.number)

    review_states, committers = classify(
        reviews,
        config["require_committers_approval"],
        lambda username: get_permission(this_repo, username),
    )
    is_approved = decide(review_states, config["num_of_approvals"])

    label = config.get("label")
    action = decide_label_action(is_approved, label_names, label, config["remove_label_when_approval_missing"])
    comment = config.get("comment") or ""

    if dry_run:
        if action.should_set:
            console.print(f'[yellow]Dry run: would set label "{escape(label)}".[/yellow]')
            if comment:
                console.print("[yellow]Dry run: would add comment.[/yellow]")
        elif action.should_remove:
            console.print(f'[yellow]Dry run: would remove label "{escape(label)}".[/yellow]')
    elif action.should_set:
        console.print(f'Setting label "{label}"', markup=False)
        add_label(this_pr, label)
        if comment:
            console.print(f'Adding comment "{comment}"', markup=False)
            add_comment(this_pr, comment)
    elif action.should_remove:
        console.print(f'Removing label "{label}"', markup=False)
        remove_label(this_pr, label)

    return LabelResult(
        repo=repo,
        pr_number=this_pr.number,
        is_approved=is_approved,
        should_label_be_set=action.should_set,
        should_label_be_removed=action.should_remove,
        review_states=review_states,
        committers=sorted(committers),
    )
