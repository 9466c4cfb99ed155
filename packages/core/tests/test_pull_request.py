"""Tests for GitHub pull request helper functions."""

from unittest.mock import MagicMock

from github import GithubException

from prlabel_core.gh.pull_request import (
    add_comment,
    add_label,
    error_message,
    get_label_names,
    get_permission,
    get_reviews,
    remove_label,
)


def _label(name):
    label = MagicMock()
    label.name = name
    return label


class TestReadHelpers:
    def test_label_names(self):
        pr = MagicMock()
        pr.labels = [_label("bug"), _label("approved")]
        assert get_label_names(pr) == ["bug", "approved"]

    def test_label_names_empty(self):
        pr = MagicMock()
        pr.labels = []
        assert get_label_names(pr) == []

    def test_reviews_materialized_in_order(self):
        first, second = MagicMock(), MagicMock()
        pr = MagicMock()
        pr.get_reviews.return_value = iter([first, second])
        assert get_reviews(pr) == [first, second]

    def test_permission(self):
        repo = MagicMock()
        repo.get_collaborator_permission.return_value = "write"
        assert get_permission(repo, "alice") == "write"
        repo.get_collaborator_permission.assert_called_once_with("alice")


class TestWriteHelpers:
    def test_add_label(self):
        pr = MagicMock()
        add_label(pr, "approved")
        pr.add_to_labels.assert_called_once_with("approved")

    def test_remove_label(self):
        pr = MagicMock()
        remove_label(pr, "approved")
        pr.remove_from_labels.assert_called_once_with("approved")

    def test_add_comment_is_issue_comment(self):
        pr = MagicMock()
        add_comment(pr, "LGTM")
        pr.create_issue_comment.assert_called_once_with("LGTM")


class TestErrorMessage:
    def test_github_message_extracted(self):
        exc = GithubException(403, {"message": "Resource not accessible by integration"})
        assert error_message(exc) == "Resource not accessible by integration (403)"

    def test_plain_exception(self):
        assert error_message(ValueError("PR #1 not found in o/r.")) == "PR #1 not found in o/r."
