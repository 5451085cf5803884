"""An in-memory log record store that the log view displays."""

from __future__ import annotations

import logging
from dataclasses import dataclass


@dataclass(frozen=True)
class LogLine:
    """One stored log message."""

    level: int
    target: str
    text: str


class LogStore(logging.Handler):
    """A logging handler that keeps every record it receives."""

    def __init__(self) -> None:
        super().__init__(level=logging.NOTSET)
        self._lines: list[LogLine] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = LogLine(record.levelno, record.name, record.getMessage())
        except Exception:
            self.handleError(record)
            return
        with self.lock:
            self._lines.append(line)

    @property
    def lines(self) -> list[LogLine]:
        """A snapshot of the stored lines, oldest first."""
        with self.lock:
            return list(self._lines)


_STORE = LogStore()


def get_lines() -> list[LogLine]:
    """Return the lines collected by the global store, oldest first."""
    return _STORE.lines


def setup_logger() -> None:
    """Attach the global store to the root logger at INFO level."""
    root = logging.getLogger()
    if _STORE not in root.handlers:
        root.addHandler(_STORE)
    root.setLevel(logging.INFO)