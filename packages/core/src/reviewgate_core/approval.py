"""Required-reviewer resolution and the approval decision."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.console import Console

if TYPE_CHECKING:
    from reviewgate_core.client import BaseGateClient
    from reviewgate_core.models import Review

console = Console(soft_wrap=True)
logger = logging.getLogger(__name__)

APPROVED_STATE = "approved"


def resolve_required_reviewers(
    client: BaseGateClient,
    org: str,
    team_slug: str,
    exclude_login: str | None = None,
) -> list[str]:
    """Return the team's member logins with ``exclude_login`` (the PR author) removed.

    Lookup failures propagate; an unreadable team must fail the run rather
    than silently produce an empty reviewer list.
    """
    console.print(f"Getting the team members for the {team_slug} team...", markup=False)

    logins = client.list_team_members(org, team_slug)

    if exclude_login:
        console.print("Filtering out the pull request author from the team members...", markup=False)
        logins = [login for login in logins if login != exclude_login]

    console.print(f"The following logins were found for the team: {', '.join(logins)}", markup=False)
    return logins


def fetch_reviews(client: BaseGateClient, owner: str, repo: str, pr_number: int) -> list[Review]:
    reviews = list(client.list_reviews(owner, repo, pr_number))
    logger.debug("Fetched %d review(s) for %s/%s#%d", len(reviews), owner, repo, pr_number)
    return reviews


def latest_review(reviewer: str, reviews: list[Review]) -> Review | None:
    """Return the reviewer's most recent review, or None if they never reviewed."""
    last = None
    for review in reviews:
        if review.author == reviewer:
            last = review
    return last


def is_approval(review: Review | None) -> bool:
    return review is not None and review.state.lower() == APPROVED_STATE


def find_required_approval(required_reviewers: list[str], reviews: list[Review]) -> str | None:
    """Return the first required reviewer whose latest review is an approval.

    Only each reviewer's last review counts: a later CHANGES_REQUESTED
    supersedes an earlier APPROVED and vice versa. A reviewer with no
    reviews at all is treated as not approved.
    """
    for reviewer in required_reviewers:
        console.print(f"Checking for an approved review from {reviewer}...", markup=False)

        if is_approval(latest_review(reviewer, reviews)):
            console.print(f"An approved review was found from {reviewer}...", markup=False)
            return reviewer

        console.print(f"No approved review was found from {reviewer}...", markup=False)

    return None


def has_required_approval(required_reviewers: list[str], reviews: list[Review]) -> bool:
    return find_required_approval(required_reviewers, reviews) is not None
