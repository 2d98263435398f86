"""Tests for the Actions entry point."""

from __future__ import annotations

import io
import json

import pytest
import yaml

from task_assistant.engine.action import run_action
from task_assistant.shared.domain.exceptions import EngineError, Severity


@pytest.fixture(autouse=True)
def _no_github_output(monkeypatch):
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "task-assistant.yml"
    path.write_text(
        yaml.safe_dump(
            {
                "tracks": {"bug": ["bug"]},
                "milestone_rules": {"bug": "Bugfix Sprint"},
                "self_healing": {"enabled": True, "fix_missing_track": True, "fix_missing_milestone": True},
                "telemetry": {"enabled": True, "path": str(tmp_path / "telemetry")},
            }
        )
    )
    return path


@pytest.fixture
def event_file(tmp_path, event_payload):
    path = tmp_path / "event.json"
    path.write_text(json.dumps(event_payload))
    return path


@pytest.mark.asyncio
async def test_run_publishes_result(local_settings, tracker, config_file, event_file, tmp_path):
    stream = io.StringIO()

    outcome = await run_action(
        local_settings, config_path=config_file, event_path=event_file, tracker=tracker, stream=stream
    )

    assert outcome.succeeded
    published = json.loads(stream.getvalue())
    assert published == {
        "track": "bug",
        "actions": ["apply-track-label:track:bug", "set-milestone:Bugfix Sprint"],
        "milestone": "Bugfix Sprint",
        "telemetryFile": str(tmp_path / "telemetry" / "issue-42.json"),
    }


@pytest.mark.asyncio
async def test_env_overrides_replace_sections(local_settings, tracker, config_file, event_file):
    settings = local_settings.model_copy(update={"track_config": {"crash": ["bug"]}, "milestone_rules": {}})

    outcome = await run_action(
        settings, config_path=config_file, event_path=event_file, tracker=tracker, stream=io.StringIO()
    )

    assert outcome.result.track == "crash"
    assert outcome.result.actions == ("apply-track-label:track:crash",)


@pytest.mark.asyncio
async def test_failed_run_reports_error(local_settings, make_tracker, config_file, event_file):
    stream = io.StringIO()

    outcome = await run_action(
        local_settings,
        config_path=config_file,
        event_path=event_file,
        tracker=make_tracker(fail_on={"update_issue_milestone"}),
        stream=stream,
    )

    assert not outcome.succeeded
    lines = stream.getvalue().splitlines()
    assert json.loads(lines[0])["actions"] == ["apply-track-label:track:bug"]
    assert lines[1].startswith("::error::[API] Failed to attach milestone #1 to issue #42")


@pytest.mark.asyncio
async def test_payload_without_issue(local_settings, tracker, config_file, tmp_path):
    path = tmp_path / "push.json"
    path.write_text(json.dumps({"ref": "refs/heads/main"}))
    stream = io.StringIO()

    outcome = await run_action(local_settings, config_path=config_file, event_path=path, tracker=tracker, stream=stream)

    assert outcome is None
    assert stream.getvalue().startswith("::notice::No issue in event payload.")
    assert tracker.calls == []


@pytest.mark.asyncio
async def test_missing_event_path_is_fatal(local_settings, tracker, config_file):
    settings = local_settings.model_copy(update={"event_path": None})

    with pytest.raises(EngineError) as exc_info:
        await run_action(settings, config_path=config_file, tracker=tracker)

    assert exc_info.value.severity is Severity.FATAL
