"""Tests for TelemetryWriter."""

from __future__ import annotations

import json

from task_assistant.classification.models import Classification
from task_assistant.telemetry.payload import build_payload
from task_assistant.telemetry.writer import TelemetryWriter, telemetry_filename


def _payload(repo, make_issue):
    return build_payload(repo, make_issue(), Classification(track="bug", actions=["a", "b"]), None)


def test_filename():
    assert telemetry_filename(42) == "issue-42.json"


def test_writes_one_file_per_issue(tmp_path, repo, make_issue):
    writer = TelemetryWriter(tmp_path / "nested" / "telemetry")

    path = writer.write(42, _payload(repo, make_issue))

    assert path == tmp_path / "nested" / "telemetry" / "issue-42.json"
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["actions"] == ["a", "b"]
    assert list(path.parent.glob("*.tmp")) == []


def test_rewrite_replaces_previous_file(tmp_path, repo, make_issue):
    writer = TelemetryWriter(tmp_path)
    writer.write(42, _payload(repo, make_issue))

    payload = build_payload(repo, make_issue(), Classification(actions=["c"]), None)
    path = writer.write(42, payload)

    assert json.loads(path.read_text())["actions"] == ["c"]
    assert [p.name for p in tmp_path.iterdir()] == ["issue-42.json"]


def test_failure_returns_none(tmp_path, repo, make_issue):
    blocker = tmp_path / "telemetry"
    blocker.write_text("not a directory")

    assert TelemetryWriter(blocker).write(42, _payload(repo, make_issue)) is None
