"""Outcome reporting for GitHub Actions.

A failed run is signalled the way the Actions toolkit's setFailed does it:
an ``::error::`` workflow command on stdout plus a non-zero exit code.
Success is the absence of that signal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from reviewgate_core.models import GateResult

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def _escape_data(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def failure_message(required_reviewers: list[str]) -> str:
    reviewers = ", ".join(required_reviewers) if required_reviewers else "(none)"
    return f"There are no approvals from any of the required reviewers: {reviewers}"


def set_failed(message: str) -> int:
    """Emit the failure annotation and return the exit code for a failed run."""
    print(f"::error::{_escape_data(message)}", flush=True)
    return EXIT_FAILURE


def report_outcome(result: GateResult | None = None, error: BaseException | None = None) -> int:
    """Translate a gate result (or the error that prevented one) into an exit code.

    Infrastructure errors and a missing approval look identical from the
    outside: one ``::error::`` line and exit code 1.
    """
    if error is not None:
        return set_failed(str(error))
    if result is None:
        return set_failed("The gate finished without producing a result.")
    if not result.approved:
        return set_failed(failure_message(result.required_reviewers))
    return EXIT_SUCCESS
