"""Event log probe returning the tail of the service log file."""

from __future__ import annotations

from collections import deque
from pathlib import Path
from typing import Final

from archetype.checks import ProbeDeadline, ProbeError
from archetype.domain import Detail

DEFAULT_TAIL_LINES: Final[int] = 100


class EventLogTailProbe:
    """Return up to `max_lines` trailing lines of a text log file.

    A blank path or a missing file yields an empty line list.
    """

    def __init__(self, log_path: str, max_lines: int = DEFAULT_TAIL_LINES):
        """Initialize event log probe.

        Args:
            log_path: Log file path; blank disables reading.
            max_lines: Maximum lines to return; non-positive means default.
        """

        self._log_path = log_path.strip()
        self._max_lines = max_lines if max_lines > 0 else DEFAULT_TAIL_LINES

    def probe_execute(self, deadline: ProbeDeadline) -> Detail:
        """Read the log tail.

        Args:
            deadline: Cooperative deadline checked before reading.

        Returns:
            Detail: `{path, lines}`.

        Raises:
            ProbeError: Raised with `{path}` detail when the file is unreadable.
        """

        failure_detail: Detail = {"path": self._log_path}
        deadline.deadline_raise_if_expired(failure_detail)
        if not self._log_path:
            return {"path": self._log_path, "lines": []}

        try:
            with Path(self._log_path).open("r", encoding="utf-8", errors="replace") as log_file:
                tail_lines = deque((line.rstrip("\r\n") for line in log_file), maxlen=self._max_lines)
        except FileNotFoundError:
            return {"path": self._log_path, "lines": []}
        except OSError as error:
            raise ProbeError(str(error), failure_detail) from error
        return {"path": self._log_path, "lines": list(tail_lines)}
