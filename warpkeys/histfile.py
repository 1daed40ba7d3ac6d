"""Persistent history of clicked positions stored in a fixed-size binary file."""

from __future__ import annotations

import os
import struct
from pathlib import Path

_NEAR = 30


class HistoryFile:
    """Clicked positions kept across sessions.

    The file holds a count followed by ``capacity`` (x, y) slots of native
    32-bit integers. Adding a position drops older entries close to it and,
    when full, the oldest entry.
    """

    def __init__(self, path: str | os.PathLike, capacity: int = 16) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.path = Path(path)
        self.capacity = capacity
        self._layout = struct.Struct(f"={1 + 2 * capacity}i")

    def _open(self):
        fd = os.open(self.path, os.O_RDWR | os.O_CREAT, 0o600)
        return os.fdopen(fd, "r+b")

    def read(self) -> list[tuple[int, int]]:
        """Return the stored positions, oldest first, creating the file if needed."""
        with self._open() as fh:
            data = fh.read(self._layout.size)
        if len(data) < 4:
            return []
        values = self._layout.unpack(data.ljust(self._layout.size, b"\0"))
        count = max(0, min(values[0], self.capacity))
        coords = values[1:]
        return [(coords[2 * i], coords[2 * i + 1]) for i in range(count)]

    def add(self, x: int, y: int) -> None:
        """Record a position, replacing any stored position near it."""
        entries = [
            (ex, ey)
            for ex, ey in self.read()
            if not (abs(ex - x) < _NEAR and abs(ey - y) < _NEAR)
        ]
        if len(entries) >= self.capacity:
            entries = entries[len(entries) - self.capacity + 1 :]
        entries.append((x, y))

        flat = [c for entry in entries for c in entry]
        flat.extend([0] * (2 * self.capacity - len(flat)))
        with self._open() as fh:
            fh.write(self._layout.pack(len(entries), *flat))