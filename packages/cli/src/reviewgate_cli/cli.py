"""CLI entry point for reviewgate.

Commands:
  check      - gate the current pull request on a required-team approval (CI)
  reviewers  - show who counts as a required reviewer for a PR author
"""

from __future__ import annotations

import importlib.metadata

import click

from reviewgate_cli.commands.check import check_cmd
from reviewgate_cli.commands.reviewers import reviewers_cmd


@click.group()
@click.version_option(
    version=importlib.metadata.version("reviewgate"),
    prog_name="reviewgate",
)
@click.option(
    "--config",
    "config_path",
    default=".reviewgate.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="REVIEWGATE_CONFIG",
)
@click.pass_context
def main(ctx: click.Context, config_path: str):
    """Require an approval from a GitHub team before a PR can pass CI."""
    ctx.ensure_object(dict)
    # Config is loaded by each command so that a broken config file is
    # reported through the same failure surface as every other error.
    ctx.obj["config_path"] = config_path


main.add_command(check_cmd)
main.add_command(reviewers_cmd)
