import pytest

from nerdlog.blhistory import BLHistory

# (operation, argument or expected string)
STEPS = [
    ("prev", ""),
    ("prev", ""),
    ("next", ""),
    ("next", ""),
    ("add", "item 1"),
    ("prev", ""),
    ("next", ""),
    ("add", "item 2"),
    ("prev", "item 1"),
    ("prev", ""),
    ("next", "item 2"),
    ("next", ""),
    ("add", "item 3"),
    ("prev", "item 2"),
    ("prev", "item 1"),
    ("prev", ""),
    ("prev", ""),
    ("next", "item 2"),
    ("next", "item 3"),
    ("next", ""),
    ("next", ""),
    ("next", ""),
    ("prev", "item 2"),
    ("add", "item 10"),
    ("next", ""),
    ("prev", "item 2"),
    ("prev", "item 1"),
    ("prev", ""),
    ("next", "item 2"),
    ("next", "item 10"),
    ("next", ""),
]


def _text(item):
    return "" if item is None else item.text


def test_browser_like_history_sequence():
    h = BLHistory()
    for i, (op, value) in enumerate(STEPS):
        if op == "add":
            h.add(value)
        elif op == "prev":
            assert _text(h.prev()) == value, f"step #{i}"
        else:
            assert _text(h.next()) == value, f"step #{i}"


def test_empty_history_returns_none():
    h = BLHistory()
    assert h.prev() is None
    assert h.next() is None


@pytest.mark.parametrize("count", [1, 2, 5])
def test_prev_walks_all_older_items(count):
    h = BLHistory()
    names = [f"q{i}" for i in range(count)]
    for name in names:
        h.add(name)
    seen = []
    while (item := h.prev()) is not None:
        seen.append(item.text)
    assert seen == list(reversed(names[:-1]))


def test_items_carry_timestamps():
    h = BLHistory()
    h.add("a")
    h.add("b")
    item = h.prev()
    assert item.text == "a"
    assert item.time_ns > 0