"""Session logging and audit trail.

The logger records structured entries for terminal events — what ran,
what failed, what got cancelled, and which user was at the prompt.

It is an in-memory buffer rather than a handler on the standard
``logging`` module: the terminal has no files or streams of its own,
and the presentation layer decides whether to show the log at all.

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source, user).
- **Logger** — an append-only log with filtering, capping, and clearing.

Design choices:
    - **IntEnum for levels** so they compare naturally with ``<``.
    - **Frozen dataclass for entries** — log records are immutable.
    - **Bounded buffer** — a long-lived session drops its oldest
      entries once ``max_entries`` is reached.
"""

from collections import deque
from dataclasses import dataclass
from enum import IntEnum

DEFAULT_MAX_ENTRIES = 1000


class LogLevel(IntEnum):
    """Severity levels for log entries."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The subsystem that generated the event (e.g. "session").
        user: The ``USER`` at the prompt when the event happened.

    """

    level: LogLevel
    message: str
    source: str
    user: str = ""

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Append-only log buffer with filtering."""

    def __init__(self, *, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        """Create an empty logger holding at most *max_entries* records."""
        self._entries: deque[LogEntry] = deque(maxlen=max_entries)

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        user: str = "",
    ) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Subsystem that generated the event.
            user: User name associated with the event.

        """
        self._entries.append(LogEntry(level=level, message=message, source=source, user=user))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.

        Returns:
            A filtered list of log entries.

        """
        result = list(self._entries)
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()

    def __len__(self) -> int:
        """Return the number of buffered entries."""
        return len(self._entries)
