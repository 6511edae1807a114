"""Bounded undo/redo history of overlay snapshots."""
from typing import Optional

from .config import HISTORY_CAPACITY
from .surface import Surface


class HistoryStack:
    """Linear history with a cursor.

    capture() stores a read-only copy of the overlay, dropping any redo branch
    after the cursor. When more than ``capacity`` entries exist the oldest is
    evicted, so undo can never go back further than ``capacity - 1`` steps.
    """

    def __init__(self, capacity: int = HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self.capacity = int(capacity)
        self._entries = []
        self._cursor = -1

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current(self) -> Optional[Surface]:
        if self._cursor < 0:
            return None
        return self._entries[self._cursor]

    def __len__(self):
        return len(self._entries)

    def __getitem__(self, index) -> Surface:
        return self._entries[index]

    def clear(self):
        self._entries.clear()
        self._cursor = -1

    def reset(self, initial: Surface):
        """Drop all entries and start over from a single snapshot of ``initial``."""
        self.clear()
        self.capture(initial)

    def capture(self, overlay: Surface):
        snapshot = overlay.frozen()
        # discard the redo branch
        del self._entries[self._cursor + 1:]
        self._entries.append(snapshot)
        self._cursor = len(self._entries) - 1
        if len(self._entries) > self.capacity:
            del self._entries[0]
            self._cursor -= 1

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def undo(self) -> Optional[Surface]:
        if not self.can_undo:
            return None
        self._cursor -= 1
        return self._entries[self._cursor]

    def redo(self) -> Optional[Surface]:
        if not self.can_redo:
            return None
        self._cursor += 1
        return self._entries[self._cursor]
