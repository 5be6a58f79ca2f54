from __future__ import annotations

from github import Github

from reviewgate_core.models import Review


def get_repo(gh: Github, repo_name: str):
    return gh.get_repo(repo_name)


def get_pull(repo, pr_number: int):
    return repo.get_pull(pr_number)


def to_review(review) -> Review:
    """Map a PyGithub PullRequestReview to a Review.

    ``review.user`` is None for reviews left by since-deleted accounts; those
    map to an empty author and can never satisfy a required reviewer.
    """
    submitted_at = review.submitted_at.isoformat() if review.submitted_at else None
    return Review(
        author=review.user.login if review.user is not None else "",
        state=review.state or "",
        submitted_at=submitted_at,
    )


def get_reviews(pr) -> list[Review]:
    """Return every review on the PR in submission order (oldest first)."""
    return [to_review(r) for r in pr.get_reviews()]
