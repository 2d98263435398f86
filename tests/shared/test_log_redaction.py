"""Tests for log token redaction."""

from task_assistant.shared.infrastructure.logging import token_redactor


def test_redacts_github_tokens():
    event = {"event": "request", "token_value": "ghp_" + "a" * 36}
    out = token_redactor(None, "info", event)
    assert out["token_value"] == "[TOKEN_REDACTED]"


def test_redacts_bearer_headers_in_nested_values():
    event = {"event": "request", "headers": {"Authorization": "Bearer abc.def"}, "items": ["token=xyz"]}
    out = token_redactor(None, "info", event)
    assert out["headers"]["Authorization"] == "Bearer [TOKEN_REDACTED]"
    assert out["items"] == ["token=[REDACTED]"]


def test_leaves_other_values_alone():
    event = {"event": "track_classified", "track": "bug", "count": 3}
    assert token_redactor(None, "info", event) == event
