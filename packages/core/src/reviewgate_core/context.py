"""Invocation context for a gate run.

GitHub Actions describes the triggering event through environment variables
and a JSON payload file. ``load_context`` reads those once and hands the
pipeline an explicit ``GateContext`` so nothing downstream touches the
environment.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from rich.console import Console

console = Console(soft_wrap=True)
logger = logging.getLogger(__name__)

SUPPORTED_EVENTS = ("pull_request", "pull_request_review")


class UnsupportedEventError(ValueError):
    """Raised when the gate is triggered by anything other than a PR or PR review."""


@dataclass
class GateContext:
    """Raw invocation values; parsed only after the event has been validated."""

    event_name: str | None
    repository: str | None  # "owner/name"
    pr_number: int | str | None
    pr_author: str | None = None


def _read_payload(event_path: str | None) -> dict:
    if not event_path:
        return {}
    path = Path(event_path)
    if not path.exists():
        logger.debug("Event payload %s does not exist; continuing without it.", event_path)
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f) or {}
    except (json.JSONDecodeError, OSError) as e:
        logger.debug("Could not read event payload %s: %s", event_path, e)
        return {}


def _pr_number_from_payload(payload: dict) -> int | str | None:
    # Same lookup order as the Actions toolkit's context.issue.number.
    for key in ("pull_request", "issue"):
        number = (payload.get(key) or {}).get("number")
        if number is not None:
            return number
    return payload.get("number")


def split_repository(repository: str) -> tuple[str, str]:
    owner, sep, name = repository.partition("/")
    if not sep or not owner or not name:
        raise ValueError(f"Repository must be in owner/name format, got: {repository!r}")
    return owner, name


def parse_pr_number(value: int | str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Pull request number must be an integer, got: {value!r}")


def load_context(env: Optional[Mapping[str, str]] = None, overrides: Optional[dict] = None) -> GateContext:
    """
    Build a GateContext by merging (in order of precedence):
      1. GitHub Actions environment (GITHUB_EVENT_NAME, GITHUB_REPOSITORY, GITHUB_EVENT_PATH)
      2. Explicit overrides (event_name, repository, pr_number, pr_author); None values are ignored

    Never raises on malformed values: the event check has to run first, so
    parsing is left to split_repository / parse_pr_number.
    """
    env = os.environ if env is None else env
    overrides = {k: v for k, v in (overrides or {}).items() if v is not None}

    payload = _read_payload(env.get("GITHUB_EVENT_PATH"))
    pull_request = payload.get("pull_request") or {}

    event_name = overrides.get("event_name", env.get("GITHUB_EVENT_NAME"))
    repository = overrides.get("repository", env.get("GITHUB_REPOSITORY"))
    pr_number = overrides.get("pr_number", _pr_number_from_payload(payload))
    pr_author = overrides.get("pr_author", (pull_request.get("user") or {}).get("login"))

    return GateContext(
        event_name=event_name,
        repository=repository,
        pr_number=pr_number,
        pr_author=pr_author,
    )


def ensure_pull_request_or_review(context: GateContext) -> None:
    """Ensure the run was triggered by a pull request or a pull request review."""
    console.print("Ensuring we are in the context of a pull request or pull request review ...", markup=False)

    if context.event_name not in SUPPORTED_EVENTS:
        raise UnsupportedEventError(
            "This action should only be used on pull requests and pull request reviews! "
            f"The current event is: {context.event_name}"
        )
