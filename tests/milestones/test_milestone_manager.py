"""Tests for remote milestone management."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from task_assistant.milestones.manager import (
    attach_milestone_to_issue,
    ensure_milestone,
    find_milestone_by_title,
)
from task_assistant.shared.domain.exceptions import EngineError, Severity


class TestEnsureMilestone:
    @pytest.mark.asyncio
    async def test_existing_milestone_is_not_created(self, make_tracker, repo):
        tracker = make_tracker(milestones=[(3, "Backlog"), (7, "Bugfix Sprint")])
        on_create = MagicMock()

        number = await ensure_milestone(tracker, repo=repo, title="Bugfix Sprint", on_create=on_create)

        assert number == 7
        assert tracker.call_names == ["list_open_milestones"]
        on_create.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_milestone_is_created(self, make_tracker, repo):
        tracker = make_tracker(milestones=[(3, "Backlog")])
        on_create = MagicMock()

        number = await ensure_milestone(tracker, repo=repo, title="Bugfix Sprint", on_create=on_create)

        assert number == 4
        assert tracker.call_names == ["list_open_milestones", "create_milestone"]
        assert tracker.calls[1] == ("create_milestone", "octo", "widgets", "Bugfix Sprint")
        on_create.assert_called_once()

    @pytest.mark.asyncio
    async def test_title_match_is_exact(self, make_tracker, repo):
        tracker = make_tracker(milestones=[(3, "bugfix sprint"), (4, "Bugfix Sprint ")])
        assert await find_milestone_by_title(tracker, repo=repo, title="Bugfix Sprint") is None

    @pytest.mark.asyncio
    async def test_lookup_failure_is_api_error(self, make_tracker, repo):
        tracker = make_tracker(fail_on={"list_open_milestones"})

        with pytest.raises(EngineError) as exc_info:
            await ensure_milestone(tracker, repo=repo, title="Bugfix Sprint")

        err = exc_info.value
        assert err.severity is Severity.API
        assert err.message == "Failed to list milestones for octo/widgets"
        assert isinstance(err.cause, ConnectionError)
        assert "create_milestone" not in tracker.call_names

    @pytest.mark.asyncio
    async def test_create_failure_is_api_error(self, make_tracker, repo):
        tracker = make_tracker(fail_on={"create_milestone"})

        with pytest.raises(EngineError) as exc_info:
            await ensure_milestone(tracker, repo=repo, title="Bugfix Sprint")

        assert exc_info.value.severity is Severity.API
        assert exc_info.value.message == "Failed to create milestone 'Bugfix Sprint'"


class TestAttach:
    @pytest.mark.asyncio
    async def test_attach(self, tracker, repo):
        await attach_milestone_to_issue(tracker, repo=repo, issue_number=42, milestone_number=7)
        assert tracker.calls == [("update_issue_milestone", "octo", "widgets", 42, 7)]

    @pytest.mark.asyncio
    async def test_attach_failure(self, make_tracker, repo):
        tracker = make_tracker(fail_on={"update_issue_milestone"})

        with pytest.raises(EngineError) as exc_info:
            await attach_milestone_to_issue(tracker, repo=repo, issue_number=42, milestone_number=7)

        err = exc_info.value
        assert err.severity is Severity.API
        assert err.message == "Failed to attach milestone #7 to issue #42"
        assert err.details["issue_number"] == 42
        assert err.details["milestone_number"] == 7
