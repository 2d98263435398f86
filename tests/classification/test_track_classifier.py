"""Tests for track classification."""

from __future__ import annotations

import pytest

from task_assistant.classification.classifier import classify, match_track, track_label
from task_assistant.classification.models import NO_TRACK_MATCHED, Classification
from task_assistant.config.models import EngineConfig
from task_assistant.config.normalizer import normalize


def _config(tracks):
    return EngineConfig.build(tracks=tracks)


class TestClassify:
    def test_case_insensitive_substring_match(self):
        result = classify(_config({"bug": ["bug"]}), ["needs-triage", "Bug"])
        assert result.track == "bug"
        assert result.track_label_to_apply == "track:bug"
        assert result.violations == []
        assert result.actions == []

    def test_pattern_case_is_ignored(self):
        assert classify(_config({"ui": ["UI"]}), ["area/ui-forms"]).track == "ui"

    def test_substring_not_regex(self):
        config = _config({"ops": ["c.i"]})
        assert classify(config, ["cxi"]).track is None
        assert classify(config, ["area:c.i-pipeline"]).track == "ops"

    def test_first_declared_track_wins(self):
        config = _config({"frontend": ["ui"], "bug": ["bug"]})
        result = classify(config, ["bug", "ui"])
        assert result.track == "frontend"

    def test_declaration_order_not_label_order(self):
        config = _config({"bug": ["bug"], "frontend": ["ui"]})
        assert classify(config, ["ui", "bug"]).track == "bug"

    def test_any_pattern_of_track_matches(self):
        config = _config({"bug": ["defect", "crash"], "docs": ["doc"]})
        assert classify(config, ["app-crash"]).track == "bug"

    def test_no_match_records_violation(self):
        result = classify(_config({"bug": ["bug"]}), ["question"])
        assert result.track is None
        assert result.track_label_to_apply is None
        assert result.violations == [NO_TRACK_MATCHED]

    @pytest.mark.parametrize("raw", [None, {}, {"tracks": {}}, {"tracks": "bug"}])
    def test_empty_tracks_never_match(self, raw):
        result = classify(normalize(raw), ["bug", "ui", "anything"])
        assert result.track is None
        assert NO_TRACK_MATCHED in result.violations

    def test_no_labels(self):
        assert classify(_config({"bug": ["bug"]}), []).violations == [NO_TRACK_MATCHED]

    def test_label_to_apply_even_if_present(self):
        result = classify(_config({"bug": ["bug"]}), ["track:bug"])
        assert result.track_label_to_apply == "track:bug"

    def test_idempotent(self):
        config = _config({"bug": ["bug"], "ui": ["ui"]})
        labels = ["UI", "Bug"]
        first = classify(config, labels)
        second = classify(config, labels)
        assert (first.track, first.track_label_to_apply) == (second.track, second.track_label_to_apply)
        assert first == second

    def test_accepts_generators(self):
        assert classify(_config({"bug": ["bug"]}), (label for label in ["Bug"])).track == "bug"


def test_match_track_none_when_unconfigured():
    assert match_track(EngineConfig(), ["bug"]) is None


def test_track_label():
    assert track_label("frontend") == "track:frontend"


class TestClassificationModel:
    def test_to_dict_uses_camel_case_label_key(self):
        data = Classification("bug", "track:bug", ["x"], ["a"]).to_dict()
        assert data == {"track": "bug", "trackLabelToApply": "track:bug", "violations": ["x"], "actions": ["a"]}

    def test_from_dict_round_trip(self):
        original = Classification("bug", "track:bug", ["x"], ["a", "b"])
        assert Classification.from_dict(original.to_dict()) == original
