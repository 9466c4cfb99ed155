"""init command — write .prlabel.yml and a GitHub Actions workflow."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

import click
import yaml
from rich.console import Console

console = Console()

_WORKFLOW_TEMPLATE = """\
name: Label approved pull requests

on:
  pull_request_review:
    types: [submitted, dismissed]

jobs:
  label:
    runs-on: ubuntu-latest
    permissions:
      contents: read
      issues: write
      pull-requests: write

    steps:
      - uses: actions/checkout@v4

      - name: Set up Python
        uses: actions/setup-python@v5
        with:
          python-version: "3.12"

      - name: Install prlabel
        run: pip install "prlabel=={version}"

      - name: Label when approved
        id: approval
        env:
          GITHUB_TOKEN: ${{{{ secrets.GITHUB_TOKEN }}}}
        run: prlabel run
"""


@click.command("init")
def init_cmd():
    """Set up prlabel for a repository.

    Creates .prlabel.yml with the labeling rules and optionally generates
    a GitHub Actions workflow that runs `prlabel run` on every review.
    """
    console.print("\n[bold cyan]prlabel init[/bold cyan] — setup wizard\n")

    label = click.prompt("Label to set on approved pull requests", default="approved")
    num_of_approvals = click.prompt("Approvals required", type=click.IntRange(min=1), default=1)
    require_committers = click.confirm("Only count reviews from users with write access?", default=False)
    remove_when_missing = click.confirm("Remove the label when approval is lost?", default=False)
    comment = click.prompt("Comment to post when labeling (empty for none)", default="", show_default=False)

    config: dict = {
        "label": label,
        "num_of_approvals": num_of_approvals,
        "require_committers_approval": require_committers,
        "remove_label_when_approval_missing": remove_when_missing,
    }
    if comment:
        config["comment"] = comment

    _write_config(config)
    console.print("[green]Created .prlabel.yml[/green]")

    setup_ci = click.confirm("\nGenerate .github/workflows/prlabel.yml for GitHub Actions?", default=True)
    if setup_ci:
        _write_workflow()
        console.print("[green]Created .github/workflows/prlabel.yml[/green]")

    console.print("\n[bold green]Setup complete![/bold green]")
    console.print("Check a pull request with: [bold]prlabel status --repo <owner/name> --pr <number>[/bold]")


def _write_config(config: dict) -> None:
    """Write or update .prlabel.yml, preserving any existing keys."""
    path = Path(".prlabel.yml")
    existing: dict = {}
    if path.exists():
        existing = yaml.safe_load(path.read_text()) or {}
    existing.update(config)
    path.write_text(yaml.dump(existing, default_flow_style=False, sort_keys=False))


def _get_version() -> str:
    """Read the current prlabel version from the installed package metadata."""
    try:
        return version("prlabel")
    except PackageNotFoundError:
        return "0.1.0"


def _write_workflow() -> None:
    workflow_dir = Path(".github/workflows")
    workflow_dir.mkdir(parents=True, exist_ok=True)
    (workflow_dir / "prlabel.yml").write_text(_WORKFLOW_TEMPLATE.format(version=_get_version()))
