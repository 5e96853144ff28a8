"""components.dev_log — Structured AI / system event log.

A ring-buffer resource that records timestamped decisions: route-mode
changes for every enemy, player region transitions, navigation rebuilds.
The debug overlay prints the newest lines; tests read it to check *why*
an agent did something.

Usage:
    log = world.res(DevLog)
    log.record(eid, "nav", "direct → routed", t=clock.time,
               details={"start": 3, "goal": 7})
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field


@dataclass
class LogEntry:
    t: float
    eid: int
    cat: str
    msg: str
    details: dict | None = None

    def __str__(self) -> str:
        return f"{self.t:7.2f} #{self.eid:<4} [{self.cat}] {self.msg}"


@dataclass
class DevLog:
    """Ring-buffer of AI / system events."""

    max_entries: int = 500
    # If non-empty, only these categories are kept.
    cat_filter: set[str] = field(default_factory=set)
    entries: deque = field(init=False)

    def __post_init__(self):
        self.entries = deque(maxlen=self.max_entries)

    def record(self, eid: int, cat: str, msg: str, *,
               t: float = 0.0, details: dict | None = None) -> None:
        if self.cat_filter and cat not in self.cat_filter:
            return
        self.entries.append(LogEntry(t, eid, cat, msg, details))

    def clear(self):
        self.entries.clear()

    def recent(self, n: int = 50) -> list[LogEntry]:
        """Return the *n* most recent entries (newest last)."""
        return list(self.entries)[-n:]

    def for_eid(self, eid: int, n: int = 30) -> list[LogEntry]:
        return [e for e in self.entries if e.eid == eid][-n:]

    def for_cat(self, cat: str, n: int = 50) -> list[LogEntry]:
        return [e for e in self.entries if e.cat == cat][-n:]
