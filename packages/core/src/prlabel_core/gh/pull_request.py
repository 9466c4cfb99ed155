from __future__ import annotations

from github import Github, GithubException


def error_message(exc: Exception) -> str:
    """Return the human-readable part of an error, preferring GitHub's own message."""
    if isinstance(exc, GithubException) and isinstance(exc.data, dict) and exc.data.get("message"):
        return f"{exc.data['message']} ({exc.status})"
    return str(exc)


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def get_pull(repo, pr_number: int):
    return repo.get_pull(pr_number)


def get_label_names(pr) -> list[str]:
    return [label.name for label in pr.labels]


def get_reviews(pr) -> list:
    """Return every submitted review on the PR, oldest first."""
    return list(pr.get_reviews())


def get_permission(repo, username: str) -> str:
    """Return the collaborator permission: "admin", "write", "read" or "none"."""
    return repo.get_collaborator_permission(username)


def add_label(pr, label: str) -> None:
    pr.add_to_labels(label)


def remove_label(pr, label: str) -> None:
    pr.remove_from_labels(label)


def add_comment(pr, body: str) -> None:
    pr.create_issue_comment(body)
