"""Review aggregation and the approval decision.

Reviews are folded in submission order into one state per reviewer, so a
later CHANGES_REQUESTED replaces an earlier APPROVED from the same person
and vice versa. COMMENTED, DISMISSED and PENDING reviews never count.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from rich.console import Console

console = Console()
logger = logging.getLogger(__name__)

APPROVED = "APPROVED"
CHANGES_REQUESTED = "CHANGES_REQUESTED"

_COUNTED_STATES = (APPROVED, CHANGES_REQUESTED)
_COMMITTER_PERMISSIONS = ("admin", "write")


def _reviewer_login(review) -> str | None:
    # Reviews left by deleted accounts come back with user=None.
    user = getattr(review, "user", None)
    return getattr(user, "login", None) if user is not None else None


def classify(
    reviews: Iterable,
    require_committers_approval: bool,
    permission_lookup: Callable[[str], str],
) -> tuple[dict[str, str], set[str]]:
    """Reduce reviews to the latest counted state per reviewer.

    When ``require_committers_approval`` is set, each distinct reviewer's
    permission is looked up once via ``permission_lookup`` and only reviewers
    with admin or write access are counted. Reviews from everyone else are
    dropped, not treated as neutral.

    Returns ``(review_states, committers)``.
    """
    review_states: dict[str, str] = {}
    committers: set[str] = set()
    checked: set[str] = set()

    if require_committers_approval:
        console.print("\nChecking reviewers permissions")

    for review in reviews:
        if review.state not in _COUNTED_STATES:
            continue
        login = _reviewer_login(review)
        if login is None:
            logger.debug("Skipping %s review without a user", review.state)
            continue

        if require_committers_approval:
            if login not in checked:
                permission = permission_lookup(login)
                checked.add(login)
                if permission in _COMMITTER_PERMISSIONS:
                    committers.add(login)
                console.print(f"\t{login}: {permission}", markup=False)
            if login not in committers:
                continue

        review_states[login] = review.state

    console.print("Reviews:")
    for login, state in review_states.items():
        console.print(f"\t{login}: {state.lower()}", markup=False)

    return review_states, committers


def decide(review_states: dict[str, str], num_of_approvals: int) -> bool:
    """Return True when enough reviewers approved and nobody requested changes."""
    approved = [login for login, state in review_states.items() if state == APPROVED]
    changes_requested = [login for login, state in review_states.items() if state == CHANGES_REQUESTED]

    is_approved = len(approved) >= num_of_approvals

    # A single request for changes vetoes any number of approvals.
    if changes_requested:
        is_approved = False

    return is_approved
