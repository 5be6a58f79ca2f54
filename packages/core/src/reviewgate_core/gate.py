"""The gate pipeline: validate, resolve reviewers, fetch reviews, decide."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from reviewgate_core.approval import fetch_reviews, find_required_approval, resolve_required_reviewers
from reviewgate_core.context import ensure_pull_request_or_review, parse_pr_number, split_repository
from reviewgate_core.models import GateResult

if TYPE_CHECKING:
    from reviewgate_core.client import BaseGateClient
    from reviewgate_core.context import GateContext

logger = logging.getLogger(__name__)


def _require_coordinates(context: GateContext, team_slug: str | None) -> tuple[str, str, int]:
    """Return (owner, repo, pr_number), raising ValueError if any is missing or malformed."""
    missing = []
    if not context.repository:
        missing.append("repository (GITHUB_REPOSITORY or --repo)")
    if context.pr_number is None:
        missing.append("pull request number (event payload or --pr)")
    if not team_slug:
        missing.append("required reviewers team (team_slug in .reviewgate.yml, REVIEWGATE_TEAM or --team)")
    if missing:
        raise ValueError("Missing " + ", ".join(missing) + ".")

    owner, repo = split_repository(context.repository)
    return owner, repo, parse_pr_number(context.pr_number)


def run_gate(
    context: GateContext,
    config: dict,
    client_factory: Callable[[], BaseGateClient],
) -> GateResult:
    """Run the full gate and return a GateResult.

    The client is only built once the context has been validated, so an
    unsupported event fails without credentials or API calls. Every error
    propagates to the caller, which owns the single failure surface.
    """
    ensure_pull_request_or_review(context)

    team_slug = config.get("team_slug")
    owner, repo, pr_number = _require_coordinates(context, team_slug)

    client = client_factory()
    try:
        required = resolve_required_reviewers(client, owner, team_slug, context.pr_author)
        reviews = fetch_reviews(client, owner, repo, pr_number)
    finally:
        client.close()

    approved_by = find_required_approval(required, reviews)
    logger.debug("Gate decision for %s/%s#%d: approved_by=%r", owner, repo, pr_number, approved_by)

    return GateResult(
        approved=approved_by is not None,
        required_reviewers=required,
        approved_by=approved_by,
    )
