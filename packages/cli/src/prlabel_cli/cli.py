"""CLI entry point for prlabel.

Commands:
  run     — decide on and apply the approval label (the GitHub Actions step)
  status  — show how a pull request's reviews count, without touching it
  init    — write .prlabel.yml and an optional workflow file
"""

from __future__ import annotations

import logging

import click

from prlabel_cli.commands.init import init_cmd
from prlabel_cli.commands.run import run_cmd
from prlabel_cli.commands.status import status_cmd


@click.group()
@click.version_option(package_name="prlabel", prog_name="prlabel")
@click.option(
    "--config",
    "config_path",
    default=".prlabel.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRLABEL_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Label GitHub pull requests once they have enough approving reviews."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    if verbose:
        from rich.logging import RichHandler

        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
        )


main.add_command(run_cmd)
main.add_command(status_cmd)
main.add_command(init_cmd)
