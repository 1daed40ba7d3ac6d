"""In-session pointer position history with back/forward navigation."""

from __future__ import annotations


class History:
    """A bounded list of positions with a cursor.

    Adding a position after moving back discards the positions ahead of
    the cursor, like a browser's history.
    """

    def __init__(self, capacity: int = 16) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._entries: list[tuple[int, int]] = []
        self._cur = 0

    def get(self) -> tuple[int, int] | None:
        """Return the position at the cursor, or None if the history is empty."""
        if not self._entries:
            return None
        return self._entries[self._cur]

    def add(self, x: int, y: int) -> None:
        """Record a position, ignoring it if it repeats the current one."""
        if self.get() == (x, y):
            return
        del self._entries[self._cur + 1 :]
        self._entries.append((x, y))
        if len(self._entries) > self._capacity:
            del self._entries[0]
        self._cur = len(self._entries) - 1

    def prev(self) -> None:
        """Move the cursor back one position, stopping at the oldest."""
        if self._cur > 0:
            self._cur -= 1

    def next(self) -> None:
        """Move the cursor forward one position, stopping at the newest."""
        if self._cur + 1 < len(self._entries):
            self._cur += 1