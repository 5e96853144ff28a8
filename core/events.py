"""core/events.py — Lightweight event bus.

Decouples systems that need to *signal* something from systems that
*react* to it.  The bus lives as an ECS resource::

    from core.events import EventBus
    bus = world.res(EventBus)
    bus.emit(PlayerRegionChanged(previous=0, current=3))

Consumers subscribe with a callable::

    bus.subscribe("PlayerRegionChanged", my_handler)

And the tick pipeline drains once per frame::

    bus.drain()          # calls all handlers for pending events

Design rules:
  - Events are plain dataclasses — no behaviour.
  - ``emit()`` is O(1) (just appends).
  - ``drain()`` processes all queued events in FIFO order.
  - Handlers may emit new events; those are processed in the same drain.
"""

from __future__ import annotations
import traceback
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable


# ═══════════════════════════════════════════════════════════════════
#  Event definitions
# ═══════════════════════════════════════════════════════════════════

@dataclass
class NavigationBuilt:
    """The one-shot precompute pass finished."""
    nodes: int = 0
    edges: int = 0
    regions: int = 0
    paths: int = 0


@dataclass
class PlayerRegionChanged:
    """The tracked player crossed into another region."""
    previous: int | None = None
    current: int | None = None
    name: str = ""


@dataclass
class EntityLeftMap:
    """An agent is outside every known region."""
    eid: int = 0
    x: float = 0.0
    y: float = 0.0


# ═══════════════════════════════════════════════════════════════════
#  Event Bus
# ═══════════════════════════════════════════════════════════════════

class EventBus:
    """Fire-and-forget event bus stored as an ECS resource."""

    def __init__(self):
        self._queue: list[Any] = []
        self._subs: dict[str, list[Callable]] = defaultdict(list)

    def emit(self, event) -> None:
        """Queue an event for processing on next ``drain()``."""
        self._queue.append(event)

    def subscribe(self, event_type: str, handler: Callable) -> None:
        """Register *handler* for events whose class name is *event_type*."""
        self._subs[event_type].append(handler)

    def drain(self) -> int:
        """Process all queued events.  Returns number processed.

        A failing handler is reported and skipped; the rest still run.
        """
        processed = 0
        rounds = 100  # handlers emitting forever must not hang the frame
        while self._queue and rounds > 0:
            batch = self._queue[:]
            self._queue.clear()
            for event in batch:
                name = type(event).__name__
                for handler in self._subs.get(name, []):
                    try:
                        handler(event)
                    except Exception as exc:
                        print(f"[EVENT] handler error for {name}: {exc}")
                        traceback.print_exc()
            processed += len(batch)
            rounds -= 1
        return processed

    def __repr__(self) -> str:
        return f"EventBus(pending={len(self._queue)}, subs={len(self._subs)})"
