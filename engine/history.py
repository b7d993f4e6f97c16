"""
history.py — Bounded Undo Ledger
=================================
Last-in-first-out record of prior states.  When full, pushing forgets the
OLDEST entry instead of refusing the new one.
"""

from collections import deque
from typing import Any, Deque, Optional

HISTORY_CAPACITY = 20


class History:
    def __init__(self, capacity: int = HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self.capacity = capacity
        self._entries: Deque[Any] = deque(maxlen=capacity)

    def push(self, entry: Any) -> None:
        # deque(maxlen) drops from the left, i.e. the oldest
        self._entries.append(entry)

    def pop(self) -> Optional[Any]:
        return self._entries.pop() if self._entries else None

    def peek(self) -> Optional[Any]:
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    @property
    def is_full(self) -> bool:
        return len(self._entries) == self.capacity

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"History({len(self)}/{self.capacity})"
