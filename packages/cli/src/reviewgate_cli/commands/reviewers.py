"""reviewers command - list the required reviewers for a PR author."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from reviewgate_core.approval import resolve_required_reviewers
from reviewgate_core.client import GithubGateClient
from reviewgate_core.context import split_repository

console = Console()


@click.command("reviewers")
@click.option("--repo", "repository", required=True, help="GitHub repository (owner/name).")
@click.option("--team", default=None, help="Slug of the required reviewers team. Overrides config file.")
@click.option("--author", "pr_author", default=None, help="PR author login to leave out of the list.")
@click.pass_context
def reviewers_cmd(ctx, repository: str, team: str | None, pr_author: str | None):
    """Show whose approval would satisfy the gate.

    Useful for checking the team token and team slug before wiring the
    check into a workflow. Nothing is written to GitHub.
    """
    from reviewgate_core.config import load_config
    from reviewgate_cli.auth import resolve_team_token

    config_path = ctx.obj.get("config_path", ".reviewgate.yml") if ctx.obj else ".reviewgate.yml"
    config = load_config(config_path, cli_overrides={"team_slug": team})
    if not config.get("team_slug"):
        raise click.UsageError("No team configured. Pass --team or set team_slug in .reviewgate.yml.")

    team_token = resolve_team_token()
    if not team_token:
        raise click.UsageError("No team token found. Set REVIEWGATE_TEAM_TOKEN to a PAT with read:org scope.")

    try:
        owner, _ = split_repository(repository)
    except ValueError as e:
        raise click.UsageError(str(e))

    # Team membership only needs the team token; reuse it for the review side.
    client = GithubGateClient(review_token=team_token, team_token=team_token, api_url=config.get("api_url"))
    try:
        logins = resolve_required_reviewers(client, owner, config["team_slug"], pr_author)
    finally:
        client.close()

    if not logins:
        console.print("[yellow]No required reviewers: the team is empty once the author is excluded.[/yellow]")
        return

    table = Table(
        title=f"Required reviewers - {owner}/{config['team_slug']}",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("#", justify="right", width=4)
    table.add_column("Login")
    for i, login in enumerate(logins, 1):
        table.add_row(str(i), login)
    console.print(table)
