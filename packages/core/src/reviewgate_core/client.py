"""Read-only GitHub access used by the gate.

The pipeline depends on BaseGateClient, not on PyGithub, so tests can hand
it canned team members and reviews without any network access.

Two credentials are involved:
  - the review token (usually the workflow's GITHUB_TOKEN) lists PR reviews
  - the team token (a PAT with read:org) lists team members, which the
    workflow token is not allowed to do
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from github import Auth, Github

from reviewgate_core.gh.pull_request import get_pull, get_repo, get_reviews
from reviewgate_core.gh.teams import get_member_logins, get_team

if TYPE_CHECKING:
    from reviewgate_core.models import Review


class BaseGateClient(ABC):
    """The two lookups the gate needs, nothing more."""

    @abstractmethod
    def list_team_members(self, org: str, team_slug: str) -> list[str]:
        """Return the logins of every member of ``team_slug`` in ``org``.

        Raises on failure (team not found, missing read:org scope).
        """

    @abstractmethod
    def list_reviews(self, owner: str, repo: str, pr_number: int) -> list[Review]:
        """Return every review on the pull request, oldest first.

        Raises on failure.
        """

    def close(self) -> None:
        """Release any held connections. Default is a no-op."""


def make_github(token: str, api_url: str | None = None) -> Github:
    if api_url:
        return Github(auth=Auth.Token(token), base_url=api_url)
    return Github(auth=Auth.Token(token))


class GithubGateClient(BaseGateClient):
    """PyGithub-backed client holding one connection per credential."""

    def __init__(self, review_token: str, team_token: str, api_url: str | None = None):
        if not review_token:
            raise ValueError("No GitHub token available for reading pull request reviews.")
        if not team_token:
            raise ValueError(
                "No access token available for reading team membership. "
                "Provide a PAT with read:org scope via the additionalAccessPat input or REVIEWGATE_TEAM_TOKEN."
            )
        self._review_gh = make_github(review_token, api_url)
        self._team_gh = make_github(team_token, api_url)

    def list_team_members(self, org: str, team_slug: str) -> list[str]:
        return get_member_logins(get_team(self._team_gh, org, team_slug))

    def list_reviews(self, owner: str, repo: str, pr_number: int) -> list[Review]:
        pr = get_pull(get_repo(self._review_gh, f"{owner}/{repo}"), pr_number)
        return get_reviews(pr)

    def close(self) -> None:
        self._review_gh.close()
        self._team_gh.close()
