"""Data models shared by the gate pipeline.

Decoupled from PyGithub so the decision logic can be exercised with plain
values and stub clients.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Review:
    """A single submitted pull request review.

    Order matters: lists of reviews are kept in submission order (oldest
    first) exactly as the GitHub API returns them.
    """

    author: str
    state: str  # "APPROVED" | "CHANGES_REQUESTED" | "COMMENTED" | "DISMISSED" | ...
    submitted_at: str | None = None  # ISO-8601 UTC timestamp


@dataclass
class GateResult:
    """Outcome of one gate run, consumed by the outcome reporter."""

    approved: bool
    required_reviewers: list[str] = field(default_factory=list)
    approved_by: str | None = None
