"""Centralized async error handling for remote collaborator calls."""

import functools
from collections.abc import Callable
from typing import Any

from task_assistant.shared.domain.exceptions import EngineError, api_error
from task_assistant.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


def wrap_api_errors(
    message: str,
    context_keys: list[str] | None = None,
    log_level: str = "error",
):
    """
    Turn any failure of a remote call into an ``api``-severity EngineError.

    Eliminates repetitive try/except blocks around collaborator calls by
    providing consistent logging and wrapping. The original exception is
    attached as the error's cause. EngineErrors raised by the wrapped call
    pass through untouched.

    Args:
        message: Error message, formatted with the call's keyword arguments
            (e.g. ``"Failed to create milestone '{title}'"``)
        context_keys: Keyword arguments copied into the error details and
            the log context
        log_level: structlog level used to report the failure

    Example:
        ```python
        @wrap_api_errors("Failed to list milestones for {owner}/{repo}", context_keys=["owner", "repo"])
        async def list_milestones(*, owner, repo):
            ...
        ```
    """

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        async def wrapper(*args, **kwargs):
            try:
                return await fn(*args, **kwargs)
            except EngineError:
                raise
            except Exception as e:
                details: dict[str, Any] = {}
                if context_keys:
                    for key in context_keys:
                        if key in kwargs:
                            details[key] = kwargs[key]

                try:
                    text = message.format(**kwargs)
                except (KeyError, IndexError):
                    text = message

                log_method = getattr(logger, log_level, logger.error)
                log_method(
                    f"{fn.__name__}_failed",
                    error=str(e),
                    error_type=type(e).__name__,
                    **details,
                )
                raise api_error(text, cause=e, details=details) from e

        return wrapper

    return decorator
