"""Session log — a structured record of what the shell did.

Interactive shells are chatty on the terminal but quiet about their own
decisions: which directory a command came from, when a lazy command was
loaded, which profile line failed.  The session log keeps those events
where a host (or a test) can inspect them without scraping terminal
output.

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source).
- **Logger** — a bounded, append-only buffer with filtering and clearing.

The buffer is bounded like a kernel ring buffer: once ``capacity``
entries are stored, each new entry pushes out the oldest.
"""

from collections import deque
from dataclasses import dataclass
from enum import IntEnum

DEFAULT_CAPACITY = 1000


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
        source: The component that generated the event (e.g. "resolver").

    """

    level: LogLevel
    message: str
    source: str

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Bounded log buffer with filtering."""

    def __init__(self, *, capacity: int = DEFAULT_CAPACITY) -> None:
        """Create an empty logger holding at most *capacity* entries."""
        self._entries: deque[LogEntry] = deque(maxlen=capacity)

    @property
    def entries(self) -> list[LogEntry]:
        """Return all retained entries in chronological order."""
        return list(self._entries)

    def log(self, level: LogLevel, message: str, *, source: str) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Component that generated the event.

        """
        self._entries.append(LogEntry(level=level, message=message, source=source))

    def debug(self, message: str, *, source: str) -> None:
        """Append a DEBUG entry."""
        self.log(LogLevel.DEBUG, message, source=source)

    def info(self, message: str, *, source: str) -> None:
        """Append an INFO entry."""
        self.log(LogLevel.INFO, message, source=source)

    def warning(self, message: str, *, source: str) -> None:
        """Append a WARNING entry."""
        self.log(LogLevel.WARNING, message, source=source)

    def error(self, message: str, *, source: str) -> None:
        """Append an ERROR entry."""
        self.log(LogLevel.ERROR, message, source=source)

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
