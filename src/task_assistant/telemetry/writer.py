"""Persists telemetry payloads as one JSON file per issue."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from task_assistant.shared.infrastructure.logging import get_logger
from task_assistant.telemetry.payload import TelemetryPayload

logger = get_logger(__name__)


def telemetry_filename(issue_number: int) -> str:
    return f"issue-{issue_number}.json"


class TelemetryWriter:
    """Writes payloads under a telemetry root directory.

    Writing is best-effort: failures are logged and reported as ``None``,
    never raised.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def write(self, issue_number: int, payload: TelemetryPayload) -> Path | None:
        """Write ``payload`` for ``issue_number`` and return the file path.

        Uses atomic write (tempfile + os.replace) so a crash never leaves a
        partial JSON document behind.
        """
        target = self._root / telemetry_filename(issue_number)

        try:
            self._root.mkdir(parents=True, exist_ok=True)
            data = payload.to_json()

            fd, tmp_path = tempfile.mkstemp(dir=str(self._root), suffix=".tmp")
            closed = False
            try:
                os.write(fd, data.encode("utf-8"))
                os.close(fd)
                closed = True
                os.replace(tmp_path, str(target))
            except BaseException:
                if not closed:
                    os.close(fd)
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass
                raise
        except (OSError, TypeError, ValueError) as e:
            logger.warning("telemetry_write_failed", path=str(target), error=str(e))
            return None

        logger.debug("telemetry_written", path=str(target))
        return target
