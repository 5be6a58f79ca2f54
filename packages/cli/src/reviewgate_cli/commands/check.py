"""check command - fail the CI run unless a required reviewer has approved."""

from __future__ import annotations

import logging

import click
from rich.console import Console

from reviewgate_core.client import GithubGateClient
from reviewgate_core.context import load_context
from reviewgate_core.gate import run_gate
from reviewgate_core.report import report_outcome

console = Console()
logger = logging.getLogger(__name__)


@click.command("check")
@click.option("--team", default=None, help="Slug of the required reviewers team. Overrides config file.")
@click.option("--event", "event_name", default=None, help="Triggering event name. Defaults to GITHUB_EVENT_NAME.")
@click.option("--repo", "repository", default=None, help="Repository in owner/name format. Defaults to GITHUB_REPOSITORY.")
@click.option("--pr", "pr_number", type=int, default=None, help="Pull request number. Defaults to the event payload.")
@click.option("--author", "pr_author", default=None, help="PR author login to exclude. Defaults to the event payload.")
@click.pass_context
def check_cmd(
    ctx,
    team: str | None,
    event_name: str | None,
    repository: str | None,
    pr_number: int | None,
    pr_author: str | None,
):
    """Require an approval from at least one member of the reviewers team.

    Intended to run on pull_request and pull_request_review events. The PR
    author never counts as a required reviewer, and only each reviewer's
    latest review is considered.

    \b
    Required environment variables:
      GITHUB_TOKEN            Token able to read pull request reviews
      REVIEWGATE_TEAM_TOKEN   PAT with read:org scope to list team members
    """
    from reviewgate_core.config import load_config
    from reviewgate_cli.auth import resolve_github_token, resolve_team_token

    config_path = ctx.obj.get("config_path", ".reviewgate.yml") if ctx.obj else ".reviewgate.yml"

    result = None
    error = None
    try:
        config = load_config(config_path, cli_overrides={"team_slug": team})
        context = load_context(
            overrides={
                "event_name": event_name,
                "repository": repository,
                "pr_number": pr_number,
                "pr_author": pr_author,
            }
        )
        result = run_gate(
            context,
            config,
            client_factory=lambda: GithubGateClient(
                review_token=resolve_github_token(),
                team_token=resolve_team_token(),
                api_url=config.get("api_url"),
            ),
        )
    except Exception as e:
        logger.debug("Gate run failed", exc_info=True)
        error = e

    exit_code = report_outcome(result=result, error=error)
    if exit_code == 0:
        console.print(f"[green]Required approval found from {result.approved_by}.[/green]")
    ctx.exit(exit_code)
