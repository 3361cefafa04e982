"""Per-kind identifier allocation."""

import threading

from backend.app.models.common import EntityKind


class SequenceAllocator:
    """Issues strictly increasing integer ids, independently per entity kind.

    Ids start at 1 and are never reused. Each kind has its own lock so that
    concurrent inserts of the same kind can never be handed the same id.
    """

    def __init__(self) -> None:
        self._next: dict[EntityKind, int] = {kind: 1 for kind in EntityKind}
        self._locks: dict[EntityKind, threading.Lock] = {
            kind: threading.Lock() for kind in EntityKind
        }

    def next(self, kind: EntityKind) -> int:
        """Allocate the next id for ``kind``."""
        with self._locks[kind]:
            value = self._next[kind]
            self._next[kind] = value + 1
            return value

    def peek(self, kind: EntityKind) -> int:
        """Return the id the next allocation for ``kind`` would produce."""
        with self._locks[kind]:
            return self._next[kind]
