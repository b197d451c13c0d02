"""Command-line history with optional persistence to a file.

Each stored item is written on its own record in the form
``:<unix nanos>:<data length>:<extra length>:<extra><data>\\n``.
"""

from __future__ import annotations

import os
import re
import time
from dataclasses import dataclass
from typing import BinaryIO

__all__ = [
    "Item",
    "HistoryDecodeError",
    "HistoryDecoder",
    "CLHistory",
    "marshal_item",
]

_INT_RE = re.compile(rb"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


@dataclass(frozen=True)
class Item:
    """A single history entry."""

    time_ns: int = 0
    text: str = ""


class HistoryDecodeError(ValueError):
    """Raised when a history stream is malformed."""


def marshal_item(item: Item) -> bytes:
    """Serialize an item into a single history record."""
    data = item.text.encode("utf-8", "surrogateescape")
    return b":%d:%d:0:%s\n" % (item.time_ns, len(data), data)


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    @property
    def at_end(self) -> bool:
        return self._pos >= len(self._data)

    def expect(self, want: bytes, what: str) -> None:
        if self.at_end:
            raise HistoryDecodeError(f"{what}: unexpected EOF")
        got = self._data[self._pos]
        self._pos += 1
        if got != want[0]:
            raise HistoryDecodeError(
                f"{what}: expected to read {want[0]}, but read {got}"
            )

    def until_colon(self, what: str) -> bytes:
        end = self._data.find(b":", self._pos)
        if end < 0:
            self._pos = len(self._data)
            raise HistoryDecodeError(f"{what}: unexpected EOF")
        chunk = self._data[self._pos : end]
        self._pos = end + 1
        return chunk

    def take(self, n: int, what: str) -> bytes:
        if self._pos + n > len(self._data):
            self._pos = len(self._data)
            raise HistoryDecodeError(f"{what}: unexpected EOF")
        chunk = self._data[self._pos : self._pos + n]
        self._pos += n
        return chunk


def _parse_int(chunk: bytes, what: str) -> int:
    if not _INT_RE.fullmatch(chunk):
        raise HistoryDecodeError(f"parsing {what}: invalid syntax: {chunk!r}")
    value = int(chunk)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise HistoryDecodeError(f"parsing {what}: value out of range: {chunk!r}")
    return value


class HistoryDecoder:
    """Decodes history records from a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    def decode(self) -> list[Item]:
        """Read all records from the stream and return them as items."""
        reader = _Reader(self._stream.read())
        items: list[Item] = []
        while not reader.at_end:
            try:
                items.append(self._read_item(reader))
            except HistoryDecodeError as exc:
                raise HistoryDecodeError(f"{len(items)}th item: {exc}") from exc
        return items

    @staticmethod
    def _read_item(reader: _Reader) -> Item:
        reader.expect(b":", "reading initial colon")
        nanos = _parse_int(reader.until_colon("reading timestamp"), "timestamp")
        len_data = _parse_int(reader.until_colon("reading data length"), "data length")
        len_extra = _parse_int(
            reader.until_colon("reading extra length"), "extra length"
        )
        if len_extra > 0:
            reader.take(len_extra, "reading extra data")
        data = reader.take(len_data, "reading data") if len_data > 0 else b""
        reader.expect(b"\n", "reading final newline")
        return Item(time_ns=nanos, text=data.decode("utf-8", "surrogateescape"))


class CLHistory:
    """Shell-like command history with Prev/Next navigation.

    If ``filename`` is empty or None, history is kept in memory only;
    otherwise it is loaded from that file (a missing file is fine) and every
    added item is appended to it.
    """

    def __init__(self, filename: str | os.PathLike[str] | None = None) -> None:
        self.filename = os.fspath(filename) if filename else ""
        self._items: list[Item] = []
        # -1 means navigation is not in progress.
        self._cur_idx = -1
        self._ephemeral = Item()
        try:
            self.load()
        except FileNotFoundError:
            pass

    @property
    def items(self) -> list[Item]:
        return list(self._items)

    def load(self) -> None:
        """Replace in-memory history with the contents of the file, if any."""
        if not self.filename:
            return
        with open(self.filename, "rb") as f:
            loaded = HistoryDecoder(f).decode()
        self._items = loaded
        self._reset_navigation()

    def add(self, s: str) -> None:
        """Add an item, persist it if a file is configured, and reset navigation."""
        self._reset_navigation()
        item = Item(time_ns=time.time_ns(), text=s)
        self._items.append(item)
        if self.filename:
            with open(self.filename, "ab") as f:
                f.write(marshal_item(item))

    def reset(self) -> None:
        """Reset history navigation."""
        self._reset_navigation()

    def prev(self, s: str) -> tuple[Item, bool]:
        """Return the previous item that differs from ``s``, and whether more exist."""
        if self._cur_idx == -1:
            self._start_navigation(s)
        while True:
            self._cur_idx = max(self._cur_idx - 1, 0)
            has_more = self._cur_idx > 0
            item = self._item_at(self._cur_idx)
            if item.text != s or not has_more:
                return item, has_more

    def next(self, s: str) -> tuple[Item, bool]:
        """Return the next item that differs from ``s``, and whether more exist.

        Walking past the newest item yields the text that was being edited
        when navigation started.
        """
        if self._cur_idx == -1:
            self._start_navigation(s)
        while True:
            self._cur_idx = min(self._cur_idx + 1, len(self._items))
            has_more = self._cur_idx < len(self._items)
            item = self._item_at(self._cur_idx)
            if item.text != s or not has_more:
                return item, has_more

    def _start_navigation(self, s: str) -> None:
        self._cur_idx = len(self._items)
        self._ephemeral = Item(text=s)

    def _reset_navigation(self) -> None:
        self._cur_idx = -1
        self._ephemeral = Item()

    def _item_at(self, idx: int) -> Item:
        if idx < len(self._items):
            return self._items[idx]
        if idx == len(self._items):
            return self._ephemeral
        raise IndexError(f"idx={idx}, len(items)={len(self._items)}")