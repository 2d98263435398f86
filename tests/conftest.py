"""Shared test fixtures for the Task Assistant test suite."""

from __future__ import annotations

import pytest

from task_assistant.config.models import EngineConfig, SelfHealingConfig, TelemetryConfig
from task_assistant.github.base import IIssueTracker, MilestoneRef
from task_assistant.issues.models import Issue, IssueEvent, RepoRef
from task_assistant.shared.infrastructure.config import Settings


class FakeTracker(IIssueTracker):
    """In-memory issue tracker recording every call in order."""

    def __init__(self, milestones=None, fail_on=None):
        self.milestones = [MilestoneRef(number=n, title=t) for n, t in (milestones or [])]
        self.fail_on = set(fail_on or ())
        self.calls: list[tuple] = []
        self.issue_milestones: dict[int, int] = {}
        self.issue_labels: dict[int, list[str]] = {}

    @property
    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if name in self.fail_on:
            raise ConnectionError(f"{name} failed")

    async def list_open_milestones(self, owner, repo):
        self._record("list_open_milestones", owner, repo)
        return list(self.milestones)

    async def create_milestone(self, owner, repo, title):
        self._record("create_milestone", owner, repo, title)
        milestone = MilestoneRef(number=max([m.number for m in self.milestones], default=0) + 1, title=title)
        self.milestones.append(milestone)
        return milestone

    async def update_issue_milestone(self, owner, repo, issue_number, milestone_number):
        self._record("update_issue_milestone", owner, repo, issue_number, milestone_number)
        self.issue_milestones[issue_number] = milestone_number

    async def add_labels(self, owner, repo, issue_number, labels):
        self._record("add_labels", owner, repo, issue_number, list(labels))
        self.issue_labels.setdefault(issue_number, []).extend(labels)


@pytest.fixture
def make_tracker():
    """Factory for FakeTracker instances."""
    return FakeTracker


@pytest.fixture
def tracker():
    return FakeTracker()


@pytest.fixture
def repo():
    return RepoRef(owner="octo", repo="widgets")


@pytest.fixture
def make_issue():
    """Factory for issues with sensible defaults."""

    def _make(**overrides) -> Issue:
        values = {
            "id": 1001,
            "number": 42,
            "title": "Crash on save",
            "state": "open",
            "labels": ("needs-triage", "Bug"),
            "milestone_title": None,
            "created_at": "2026-01-05T10:00:00Z",
            "updated_at": "2026-01-06T12:30:00Z",
        }
        values.update(overrides)
        values["labels"] = tuple(values["labels"])
        return Issue(**values)

    return _make


@pytest.fixture
def make_event(repo, make_issue):
    def _make(**overrides) -> IssueEvent:
        return IssueEvent(repo=repo, issue=make_issue(**overrides), action="opened")

    return _make


@pytest.fixture
def healing_config(tmp_path):
    """Bug track with a milestone rule and every self-healing flag on."""
    return EngineConfig.build(
        tracks={"bug": ["bug"]},
        milestone_rules={"bug": "Bugfix Sprint"},
        self_healing=SelfHealingConfig(enabled=True, fix_missing_track=True, fix_missing_milestone=True),
        telemetry=TelemetryConfig(enabled=True, path=str(tmp_path / "telemetry")),
    )


@pytest.fixture
def local_settings():
    return Settings(run_mode="local", telemetry_enabled=True, telemetry_root=None, _env_file=None)


@pytest.fixture
def event_payload():
    """Minimal ``issues`` webhook payload."""
    return {
        "action": "opened",
        "issue": {
            "id": 1001,
            "number": 42,
            "title": "Crash on save",
            "state": "open",
            "labels": [{"name": "needs-triage"}, {"name": "Bug"}],
            "milestone": None,
            "created_at": "2026-01-05T10:00:00Z",
            "updated_at": "2026-01-06T12:30:00Z",
        },
        "repository": {"name": "widgets", "full_name": "octo/widgets", "owner": {"login": "octo"}},
    }
