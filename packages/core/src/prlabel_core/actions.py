"""GitHub Actions workflow commands: step outputs and log annotations."""

from __future__ import annotations

import os

from rich.console import Console

console = Console()


def _escape(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def in_github_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"


def annotate(level: str, message: str) -> None:
    """Emit a ::warning:: or ::error:: annotation when running inside Actions."""
    if level not in ("notice", "warning", "error"):
        raise ValueError(f"Unknown annotation level: {level!r}")
    if in_github_actions():
        print(f"::{level}::{_escape(message)}", flush=True)


def set_output(name: str, value: str, output_path: str | None = None) -> None:
    console.print(f"Setting output: {name}: {value}", markup=False)
    if output_path:
        with open(output_path, "a", encoding="utf-8") as f:
            f.write(f"{name}={value}\n")


def write_outputs(outputs: dict[str, str], output_path: str | None = None) -> None:
    for name, value in outputs.items():
        set_output(name, value, output_path)
