"""
Structured logging configuration using structlog.

Provides consistent, structured logging across all modules. Logs go to
stderr so that the run result printed on stdout stays machine readable.
"""

import logging
import re
import sys
from typing import Any

import structlog

from task_assistant.shared.infrastructure.config import Settings

_REDACTIONS = {
    r"\bgh[pousr]_[A-Za-z0-9]{20,}\b": "[TOKEN_REDACTED]",
    r"\bgithub_pat_[A-Za-z0-9_]{20,}\b": "[TOKEN_REDACTED]",
    r"(token|password|secret)['\"]?\s*[:=]\s*['\"]?([^'\"\s]+)": r"\1=[REDACTED]",
    r"Bearer\s+\S+": "Bearer [TOKEN_REDACTED]",
}


def _redact_string(text: str) -> str:
    for pattern, replacement in _REDACTIONS.items():
        text = re.sub(pattern, replacement, text, flags=re.IGNORECASE)
    return text


def token_redactor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Redact GitHub tokens and credentials from log events.

    Args:
        logger: Logger instance
        method_name: Logging method name
        event_dict: Event dictionary to process

    Returns:
        Redacted event dictionary
    """

    def redact(value: Any) -> Any:
        if isinstance(value, str):
            return _redact_string(value)
        if isinstance(value, dict):
            return {k: redact(v) for k, v in value.items()}
        if isinstance(value, list):
            return [redact(i) for i in value]
        return value

    return {k: redact(v) for k, v in event_dict.items()}


def configure_logging(settings: Settings, stream: Any = sys.stderr) -> None:
    """
    Configure structlog for the process.

    Sets up:
    - Pretty console output for development
    - JSON output otherwise
    - Log level from settings
    - Context variables (repository, issue number) merged into every event
    """
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        token_redactor,
    ]

    if settings.is_development:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=stream.isatty() if hasattr(stream, "isatty") else False),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        force=True,
    )


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("track_classified", track="bug")
    """
    return structlog.get_logger(name)
