"""
core/ecs.py — Entity-Component-System

Entities are ints. Components are any object, stored by type.
Query by component types to get matching entities.

    w = World()
    e = w.spawn()
    w.add(e, Position(5.0, 3.0))
    w.add(e, Character(max_speed=2.5))

    for eid, pos, ch in w.query(Position, Character):
        pos.x += ch.desired_direction[0]

Change tracking: every ``add()`` of a component type that was not already
present on the entity is remembered until a system drains it with
``take_added(Type)``.  This is how the navigation system picks up newly
spawned node / region markers without rescanning every frame.
"""

from __future__ import annotations
from typing import Any, Iterator


class World:
    def __init__(self):
        self._next_id = 0
        self._stores: dict[type, dict[int, Any]] = {}
        self._dead: set[int] = set()
        # comp type → eids that gained it since the last take_added()
        self._added: dict[type, list[int]] = {}

    # -- Entities --

    def spawn(self) -> int:
        self._next_id += 1
        return self._next_id

    def spawn_with(self, *components: Any) -> int:
        """Spawn an entity and attach *components* in order."""
        eid = self.spawn()
        for comp in components:
            self.add(eid, comp)
        return eid

    def kill(self, eid: int):
        self._dead.add(eid)

    def alive(self, eid: int) -> bool:
        return eid not in self._dead

    def purge(self):
        """Remove dead entities from all stores. Call once per frame."""
        if not self._dead:
            return
        for store in self._stores.values():
            for eid in self._dead:
                store.pop(eid, None)
        for t, eids in self._added.items():
            self._added[t] = [e for e in eids if e not in self._dead]
        self._dead.clear()

    # -- Components --

    def add(self, eid: int, comp: Any):
        t = type(comp)
        store = self._stores.setdefault(t, {})
        if eid not in store:
            self._added.setdefault(t, []).append(eid)
        store[eid] = comp

    def get(self, eid: int, comp_type: type) -> Any | None:
        return self._stores.get(comp_type, {}).get(eid)

    def has(self, eid: int, comp_type: type) -> bool:
        return eid in self._stores.get(comp_type, {})

    def take_added(self, comp_type: type) -> list[int]:
        """Return (and forget) living eids that gained *comp_type*, in order."""
        eids = self._added.pop(comp_type, [])
        store = self._stores.get(comp_type, {})
        return [e for e in eids if e in store and e not in self._dead]

    # -- Queries --

    def query(self, *types: type) -> Iterator[tuple]:
        """Yield (eid, comp1, comp2, ...) for entities that have ALL types."""
        if not types:
            return
        # Iterate over the smallest bucket
        buckets = [(t, self._stores.get(t, {})) for t in types]
        buckets.sort(key=lambda b: len(b[1]))
        smallest = buckets[0][1]
        for eid in list(smallest):
            if eid in self._dead or eid < 0:
                continue
            if all(eid in b for _, b in buckets):
                yield (eid, *(self._stores[t][eid] for t in types))

    def query_one(self, *types: type) -> tuple | None:
        """Return first match or None."""
        for result in self.query(*types):
            return result
        return None

    def all_of(self, comp_type: type) -> Iterator[tuple[int, Any]]:
        """Yield (eid, component) for every entity with this type."""
        for eid, comp in self._stores.get(comp_type, {}).items():
            if eid >= 0 and eid not in self._dead:
                yield eid, comp

    def count(self, comp_type: type) -> int:
        return sum(1 for _ in self.all_of(comp_type))

    # -- Resources (singletons, not tied to entities) --

    def set_res(self, resource: Any):
        t = type(resource)
        if t not in self._stores:
            self._stores[t] = {}
        self._stores[t][-1] = resource

    def res(self, res_type: type) -> Any | None:
        return self._stores.get(res_type, {}).get(-1)
