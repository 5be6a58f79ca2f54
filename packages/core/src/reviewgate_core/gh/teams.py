from __future__ import annotations

from github import Github


def get_team(gh: Github, org: str, team_slug: str):
    return gh.get_organization(org).get_team_by_slug(team_slug)


def get_member_logins(team) -> list[str]:
    """Return member logins in the order GitHub lists them."""
    return [member.login for member in team.get_members()]
