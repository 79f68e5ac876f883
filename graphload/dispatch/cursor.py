"""
Shared round-robin cursor over the entity list.

Every runner pulls its next entity from one `RoundRobinCursor`. The lock only
covers the read/advance/wrap step; query work happens outside of it. This is a
single global sequence, not a work queue: when the cursor wraps back to an
entity that is still being queried by another runner, that entity is handed
out again and queried concurrently.
"""

from __future__ import annotations

import threading
from typing import Sequence, Tuple

from graphload.domain.models import Entity
from graphload.errors import CursorExhausted, EmptyEntityListError


class RoundRobinCursor:
    """
    Thread-safe cursor handing out entities as 0, 1, ..., L-1, 0, 1, ...

    Parameters
    ----------
    entities : Sequence[Entity]
        Non-empty entity list; copied into an immutable tuple.
    single_pass : bool
        Hand out every entity exactly once, then raise `CursorExhausted`.
    """

    def __init__(self, entities: Sequence[Entity], single_pass: bool = False) -> None:
        if not entities:
            raise EmptyEntityListError("Cannot build a cursor over an empty entity list")
        self._entities: Tuple[Entity, ...] = tuple(entities)
        self._single_pass = single_pass
        self._index = 0
        self._handed_out = 0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entities)

    @property
    def position(self) -> int:
        """Index of the entity the next call to `next()` returns."""
        with self._lock:
            return self._index

    @property
    def handed_out(self) -> int:
        """Total number of entities handed out so far."""
        with self._lock:
            return self._handed_out

    def next(self) -> Entity:
        with self._lock:
            if self._single_pass and self._handed_out >= len(self._entities):
                raise CursorExhausted("Every entity has been handed out once")
            entity = self._entities[self._index]
            self._index = (self._index + 1) % len(self._entities)
            self._handed_out += 1
        return entity


__all__ = ["RoundRobinCursor"]
