"""Browser-like history of strings, navigable back and forth."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

__all__ = ["Item", "BLHistory"]


@dataclass(frozen=True)
class Item:
    """A single history entry."""

    time_ns: int
    text: str


@dataclass
class BLHistory:
    """In-memory history that behaves like a browser's back/forward history.

    New items can be added, and the history can be walked back and forth.
    Adding an item while positioned a few steps back drops all the newer
    items and places the new one right after the current position.
    """

    _items: list[Item] = field(default_factory=list)
    _cur_idx: int = 0

    def add(self, s: str) -> None:
        """Add a new item at the current position, dropping newer items."""
        item = Item(time_ns=time.time_ns(), text=s)
        if self._items and self._cur_idx < len(self._items) - 1:
            del self._items[self._cur_idx + 1 :]
        self._items.append(item)
        self._cur_idx = len(self._items) - 1

    def prev(self) -> Item | None:
        """Step back and return the item there, or None if already at the start."""
        if self._cur_idx == 0:
            return None
        self._cur_idx -= 1
        return self._items[self._cur_idx]

    def next(self) -> Item | None:
        """Step forward and return the item there, or None if already at the end."""
        if self._cur_idx >= len(self._items) - 1:
            return None
        self._cur_idx += 1
        return self._items[self._cur_idx]