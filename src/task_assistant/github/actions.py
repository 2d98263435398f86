"""
GitHub Actions workflow commands.

Reference: https://docs.github.com/en/actions/using-workflows/workflow-commands-for-github-actions
"""

from __future__ import annotations

import os
import sys
import uuid
from pathlib import Path
from typing import TextIO


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def set_output(name: str, value: str, stream: TextIO | None = None) -> None:
    """
    Set a step output.

    Appends to ``$GITHUB_OUTPUT`` when running inside Actions, using a
    random delimiter so multi-line values are safe. Otherwise the value is
    printed to ``stream`` (stdout by default).
    """
    output_file = os.environ.get("GITHUB_OUTPUT")
    if output_file:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        with Path(output_file).open("a", encoding="utf-8") as fh:
            fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        return

    print(value, file=stream or sys.stdout)


def notice(message: str, stream: TextIO | None = None) -> None:
    """Emit a ``::notice::`` annotation."""
    print(f"::notice::{_escape_data(message)}", file=stream or sys.stdout)


def set_failed(message: str, stream: TextIO | None = None) -> None:
    """Emit an ``::error::`` annotation. The caller sets the exit status."""
    print(f"::error::{_escape_data(message)}", file=stream or sys.stdout)
