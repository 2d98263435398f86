"""Tests for loading configuration documents from disk."""

from __future__ import annotations

import json

from task_assistant.config.loader import apply_overrides, load_config
from task_assistant.config.models import EngineConfig
from task_assistant.config.normalizer import ConfigNormalizer

YAML_DOC = """\
tracks:
  bug: ["bug", "defect"]
  ui: ["ui"]
milestone_rules:
  bug: Bugfix Sprint
self-healing:
  enabled: true
  fix_missing_track: true
  fix_missing_milestone: false
telemetry:
  path: audit
"""


def test_loads_yaml(tmp_path):
    path = tmp_path / "task-assistant.yml"
    path.write_text(YAML_DOC)

    config = load_config(path)

    assert list(config.tracks) == ["bug", "ui"]
    assert config.tracks["bug"] == ("bug", "defect")
    assert config.milestone_rules["bug"] == "Bugfix Sprint"
    assert config.self_healing.enabled is True
    assert config.self_healing.fix_missing_track is True
    assert config.self_healing.fix_missing_milestone is False
    assert config.telemetry.path == "audit"


def test_loads_json(tmp_path):
    path = tmp_path / "task-assistant.json"
    path.write_text(json.dumps({"tracks": {"bug": ["bug"]}, "selfHealing": {"enabled": True}}))

    config = load_config(path)

    assert list(config.tracks) == ["bug"]
    assert config.self_healing.enabled is True


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "absent.yml") == EngineConfig()


def test_unparseable_file_gives_defaults(tmp_path):
    path = tmp_path / "broken.yml"
    path.write_text("tracks: [unclosed\n  - : :")

    normalizer = ConfigNormalizer()
    config = load_config(path, normalizer=normalizer)

    assert config == EngineConfig()
    assert normalizer.warnings


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("")
    assert load_config(path) == EngineConfig()


def test_overrides_replace_sections(tmp_path):
    path = tmp_path / "task-assistant.yml"
    path.write_text(YAML_DOC)

    config = load_config(path, overrides={"tracks": {"docs": ["doc"]}, "milestone_rules": {"docs": "Docs"}})

    assert list(config.tracks) == ["docs"]
    assert dict(config.milestone_rules) == {"docs": "Docs"}
    assert config.self_healing.enabled is True


def test_overrides_without_document(tmp_path):
    config = load_config(tmp_path / "absent.yml", overrides={"tracks": {"bug": ["bug"]}})
    assert list(config.tracks) == ["bug"]


def test_apply_overrides_matches_key_variants():
    merged = apply_overrides({"milestoneRules": {"a": "A"}, "tracks": {}}, {"milestone_rules": {"b": "B"}})
    assert merged == {"tracks": {}, "milestone_rules": {"b": "B"}}


def test_apply_overrides_noop():
    document = {"tracks": {}}
    assert apply_overrides(document, None) is document
