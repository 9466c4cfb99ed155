"""Resolve which pull request a workflow run is about.

Only two triggers make sense:

  pull_request_review  the event payload embeds the pull request
  workflow_run         the payload does not; the number must be passed in
                       explicitly through the pullRequestNumber input
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

PULL_REQUEST_REVIEW = "pull_request_review"
WORKFLOW_RUN = "workflow_run"

MISSING_PR_NUMBER_WARNING = (
    f'If action is triggered by "{WORKFLOW_RUN}" then input "pullRequestNumber" is required.\n'
    "It might be missing because the pull request might have been already merged or a fixup pushed to "
    "the PR branch. None of the outputs will be set as we cannot find the right PR."
)


def load_event_payload(event_path: str | None) -> dict:
    """Read the webhook payload the runner stored at GITHUB_EVENT_PATH."""
    if not event_path:
        return {}
    path = Path(event_path)
    if not path.exists():
        logger.debug("Event payload %s does not exist", event_path)
        return {}
    with open(path, encoding="utf-8") as f:
        return json.load(f) or {}


def resolve_pull_request_number(event_name: str, payload: dict, pull_request_number: int | None) -> int | None:
    """Return the PR number for this run, or None when the run should stop quietly.

    Raises ValueError for triggers this tool cannot serve and for
    pull_request_review payloads without a pull request.
    """
    if event_name == PULL_REQUEST_REVIEW:
        number = (payload.get("pull_request") or {}).get("number")
        if number is None:
            raise ValueError("Could not find PR number from context, exiting")
        return int(number)

    if event_name == WORKFLOW_RUN:
        if pull_request_number is None:
            logger.warning(MISSING_PR_NUMBER_WARNING)
            return None
        return pull_request_number

    raise ValueError(
        f'This action is only useful in "{PULL_REQUEST_REVIEW}" or "{WORKFLOW_RUN}" '
        f'triggered runs and you used it in "{event_name}"'
    )
