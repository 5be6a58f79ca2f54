"""Credential resolution for the two GitHub clients.

Review token, first match wins:
  1. INPUT_GITHUBTOKEN (the action's ``githubToken`` input)
  2. GITHUB_TOKEN environment variable
  3. `gh auth token` (GitHub CLI session, for local runs)

Team token, first match wins:
  1. INPUT_ADDITIONALACCESSPAT (the action's ``additionalAccessPat`` input)
  2. REVIEWGATE_TEAM_TOKEN environment variable

The workflow token cannot read org team membership, so the team token is
never borrowed from the review token sources.
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)


def _gh_cli_token() -> str | None:
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        # gh is not installed or timed out.
        return None
    if result.returncode == 0:
        gh_token = result.stdout.strip()
        if gh_token:
            logger.debug("Resolved GitHub token via gh CLI session.")
            return gh_token
    return None


def resolve_github_token() -> str | None:
    """Return the token used to read reviews, or None if no source is available."""
    for var in ("INPUT_GITHUBTOKEN", "GITHUB_TOKEN"):
        token = os.environ.get(var)
        if token:
            return token
    return _gh_cli_token()


def resolve_team_token() -> str | None:
    """Return the token used to read team membership, or None."""
    for var in ("INPUT_ADDITIONALACCESSPAT", "REVIEWGATE_TEAM_TOKEN"):
        token = os.environ.get(var)
        if token:
            return token
    return None
