"""Audit log for file system events.

Every mutation, every denied permission check, and every registry
change is recorded as a structured entry: what happened, which
subsystem reported it, and which principal was acting.

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source, actor).
- **Logger** — an append-only log with filtering and clearing.

Levels are an ``IntEnum`` so they compare naturally with ``<``; entries
are frozen dataclasses because log records should not change after
they are written.
"""

from dataclasses import dataclass
from enum import IntEnum


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
        source: The subsystem that generated the event (e.g. "fs").
        actor: The principal that triggered the event.

    """

    level: LogLevel
    message: str
    source: str
    actor: str

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Append-only log buffer with filtering."""

    def __init__(self) -> None:
        """Create an empty logger."""
        self._entries: list[LogEntry] = []

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
        actor: str,
    ) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Subsystem that generated the event.
            actor: Principal associated with the event.

        """
        self._entries.append(LogEntry(level=level, message=message, source=source, actor=actor))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
        actor: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching every given criterion.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.
            actor: If set, only return entries triggered by this principal.

        """
        result = list(self._entries)
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        if actor is not None:
            result = [e for e in result if e.actor == actor]
        return result

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()

    def __len__(self) -> int:
        """Return the number of recorded entries."""
        return len(self._entries)
