"""
Domain exceptions for Task Assistant.

A single error type carries a closed severity tag. The run boundary switches
on the severity instead of on a class hierarchy, so every failure mode is
handled explicitly.
"""

from __future__ import annotations

import json
import traceback
from enum import Enum
from typing import Any, Mapping

import httpx
import yaml
from pydantic import ValidationError


class Severity(Enum):
    """Handling policy of an error."""

    FATAL = "fatal"
    RECOVERABLE = "recoverable"
    CONFIG = "config"
    API = "api"
    RULE = "rule"


class EngineError(Exception):
    """Base error for the whole pipeline.

    Constructed at the point of failure and never mutated afterwards: the
    severity, cause and details are exposed as read-only properties.
    """

    def __init__(
        self,
        severity: Severity,
        message: str,
        cause: BaseException | None = None,
        details: Mapping[str, Any] | None = None,
    ):
        super().__init__(message)
        self._severity = severity
        self._message = message
        self._cause = cause
        self._details = dict(details) if details else {}

    @property
    def severity(self) -> Severity:
        return self._severity

    @property
    def message(self) -> str:
        return self._message

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    @property
    def details(self) -> dict[str, Any]:
        return dict(self._details)

    def to_display(self, debug: bool = False) -> str:
        """
        Render the error for automation logs.

        Stack and cause information is only included when ``debug`` is set,
        so internal call stacks never leak into user-facing output.
        """
        out = f"[{self._severity.value.upper()}] {self._message}"

        if self._details:
            out += f"\nDetails: {json.dumps(self._details, indent=2, default=str)}"

        if debug and self._cause is not None:
            out += f"\nCause: {type(self._cause).__name__}: {self._cause}"
            stack = "".join(
                traceback.format_exception(type(self._cause), self._cause, self._cause.__traceback__)
            )
            out += f"\nStack: {stack.rstrip()}"

        return out

    def __repr__(self) -> str:
        return f"EngineError(severity={self._severity.value!r}, message={self._message!r})"


def config_error(message: str, details: Mapping[str, Any] | None = None) -> EngineError:
    """Bad configuration. Defaults were already substituted upstream."""
    return EngineError(Severity.CONFIG, message, details=details)


def api_error(
    message: str,
    cause: BaseException | None = None,
    details: Mapping[str, Any] | None = None,
) -> EngineError:
    """A remote call failed."""
    return EngineError(Severity.API, message, cause=cause, details=details)


def rule_error(message: str, details: Mapping[str, Any] | None = None) -> EngineError:
    """A classification or resolution invariant was violated."""
    return EngineError(Severity.RULE, message, details=details)


def recoverable_error(message: str, details: Mapping[str, Any] | None = None) -> EngineError:
    """Logged, the run continues with degraded behavior."""
    return EngineError(Severity.RECOVERABLE, message, details=details)


def fatal_error(
    message: str,
    cause: BaseException | None = None,
    details: Mapping[str, Any] | None = None,
) -> EngineError:
    """The process should stop with a non-zero exit."""
    return EngineError(Severity.FATAL, message, cause=cause, details=details)


def classify_exception(error: BaseException) -> Severity:
    """Map an arbitrary exception to a severity."""
    if isinstance(error, EngineError):
        return error.severity
    if isinstance(error, httpx.HTTPError):
        return Severity.API
    if isinstance(error, (yaml.YAMLError, ValidationError)):
        return Severity.CONFIG
    return Severity.FATAL


def as_engine_error(error: BaseException) -> EngineError:
    """Wrap any exception reaching the run boundary into an EngineError."""
    if isinstance(error, EngineError):
        return error
    return EngineError(
        classify_exception(error),
        f"Unhandled {type(error).__name__}: {error}",
        cause=error,
    )


_LOG_LEVELS: dict[Severity, str] = {
    Severity.FATAL: "error",
    Severity.API: "error",
    Severity.RULE: "error",
    Severity.CONFIG: "warning",
    Severity.RECOVERABLE: "warning",
}


def log_level_for(severity: Severity) -> str:
    """structlog method name used to report an error of this severity."""
    return _LOG_LEVELS[severity]
