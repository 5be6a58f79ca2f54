"""Tests for the end-to-end gate pipeline."""

from unittest.mock import MagicMock

import pytest

from reviewgate_core.context import GateContext, UnsupportedEventError
from reviewgate_core.gate import run_gate
from reviewgate_core.models import Review
from reviewgate_core.report import report_outcome

CONFIG = {"team_slug": "leads", "api_url": None}


def make_context(event_name="pull_request", pr_author="alice", pr_number=12):
    return GateContext(event_name=event_name, repository="acme/api", pr_number=pr_number, pr_author=pr_author)


def make_client(members, reviews):
    client = MagicMock()
    client.list_team_members.return_value = members
    client.list_reviews.return_value = reviews
    return client


class TestRunGate:
    def test_approval_from_other_member_passes(self):
        client = make_client(
            ["alice", "bob", "carol"],
            [Review("bob", "commented"), Review("carol", "approved")],
        )

        result = run_gate(make_context(), CONFIG, lambda: client)

        assert result.approved is True
        assert result.approved_by == "carol"
        assert result.required_reviewers == ["bob", "carol"]
        client.list_team_members.assert_called_once_with("acme", "leads")
        client.list_reviews.assert_called_once_with("acme", "api", 12)
        client.close.assert_called_once()

    def test_superseded_approval_fails(self):
        client = make_client(
            ["alice", "bob", "carol"],
            [Review("bob", "approved"), Review("bob", "changes_requested")],
        )

        result = run_gate(make_context(), CONFIG, lambda: client)

        assert result.approved is False
        assert result.approved_by is None
        assert result.required_reviewers == ["bob", "carol"]

    def test_review_event_is_accepted(self):
        client = make_client(["bob"], [Review("bob", "APPROVED")])
        result = run_gate(make_context(event_name="pull_request_review"), CONFIG, lambda: client)
        assert result.approved is True

    def test_unsupported_event_makes_no_api_calls(self):
        factory = MagicMock()

        with pytest.raises(UnsupportedEventError, match="The current event is: push"):
            run_gate(make_context(event_name="push"), CONFIG, factory)

        factory.assert_not_called()

    def test_reviewer_without_reviews_fails_without_crashing(self):
        client = make_client(["dave"], [])

        result = run_gate(make_context(pr_author="erin"), CONFIG, lambda: client)

        assert result.approved is False
        assert result.required_reviewers == ["dave"]

    def test_author_only_team_yields_empty_required_set(self):
        client = make_client(["alice"], [Review("alice", "APPROVED")])

        result = run_gate(make_context(pr_author="alice"), CONFIG, lambda: client)

        assert result.approved is False
        assert result.required_reviewers == []

    def test_membership_failure_propagates_and_closes_client(self):
        client = make_client([], [])
        client.list_team_members.side_effect = RuntimeError("404 Not Found")

        with pytest.raises(RuntimeError, match="404 Not Found"):
            run_gate(make_context(), CONFIG, lambda: client)

        client.list_reviews.assert_not_called()
        client.close.assert_called_once()

    def test_missing_team_raises_before_building_client(self):
        factory = MagicMock()
        with pytest.raises(ValueError, match="required reviewers team"):
            run_gate(make_context(), {"team_slug": None}, factory)
        factory.assert_not_called()

    def test_missing_pr_number_raises(self):
        factory = MagicMock()
        with pytest.raises(ValueError, match="pull request number"):
            run_gate(make_context(pr_number=None), CONFIG, factory)
        factory.assert_not_called()

    def test_missing_repository_raises(self):
        context = GateContext(event_name="pull_request", repository=None, pr_number=3)
        with pytest.raises(ValueError, match="repository"):
            run_gate(context, CONFIG, MagicMock())

    @pytest.mark.parametrize(
        "repository, pr_number",
        [("justname", 12), ("acme/api", "abc"), ("justname", "abc")],
    )
    def test_event_mismatch_reported_before_malformed_coordinates(self, repository, pr_number):
        context = GateContext(event_name="push", repository=repository, pr_number=pr_number)
        with pytest.raises(UnsupportedEventError, match="The current event is: push"):
            run_gate(context, CONFIG, MagicMock())

    def test_malformed_repository_raises_after_event_check(self):
        factory = MagicMock()
        context = GateContext(event_name="pull_request", repository="justname", pr_number=12)
        with pytest.raises(ValueError, match="owner/name"):
            run_gate(context, CONFIG, factory)
        factory.assert_not_called()

    def test_non_numeric_pr_number_raises_after_event_check(self):
        factory = MagicMock()
        context = GateContext(event_name="pull_request", repository="acme/api", pr_number="abc")
        with pytest.raises(ValueError, match="must be an integer"):
            run_gate(context, CONFIG, factory)
        factory.assert_not_called()

    def test_string_pr_number_is_converted(self):
        client = make_client(["bob"], [Review("bob", "APPROVED")])
        run_gate(make_context(pr_number="12"), CONFIG, lambda: client)
        client.list_reviews.assert_called_once_with("acme", "api", 12)


class TestScenariosThroughReporter:
    """The observable outcome: exit code plus the ::error:: annotation."""

    def test_success_emits_nothing(self, capsys):
        client = make_client(["alice", "bob", "carol"], [Review("bob", "commented"), Review("carol", "approved")])
        result = run_gate(make_context(), CONFIG, lambda: client)

        assert report_outcome(result=result) == 0
        assert "::error::" not in capsys.readouterr().out

    def test_missing_review_names_reviewer(self, capsys):
        client = make_client(["dave"], [])
        result = run_gate(make_context(pr_author="erin"), CONFIG, lambda: client)

        assert report_outcome(result=result) == 1
        assert "::error::There are no approvals from any of the required reviewers: dave" in capsys.readouterr().out

    def test_push_event_reports_context_mismatch(self, capsys):
        with pytest.raises(UnsupportedEventError) as excinfo:
            run_gate(make_context(event_name="push"), CONFIG, MagicMock())

        assert report_outcome(error=excinfo.value) == 1
        out = capsys.readouterr().out
        assert "::error::This action should only be used on pull requests and pull request reviews!" in out
