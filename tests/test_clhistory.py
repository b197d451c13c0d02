import io

import pytest
from hypothesis import given
from hypothesis import strategies as st

from nerdlog.clhistory import (
    CLHistory,
    HistoryDecodeError,
    HistoryDecoder,
    Item,
    marshal_item,
)


def _decode(data: bytes):
    return HistoryDecoder(io.BytesIO(data)).decode()


def test_marshal_format():
    item = Item(time_ns=1650712458000000000, text="foo bar baz")
    assert marshal_item(item) == b":1650712458000000000:11:0:foo bar baz\n"


def test_decode_skips_extra_data():
    assert _decode(b":5:3:2:xxabc\n") == [Item(time_ns=5, text="abc")]


def test_decode_empty_stream():
    assert _decode(b"") == []


def test_decode_empty_text():
    assert _decode(b":7:0:0:\n") == [Item(time_ns=7, text="")]


@given(
    st.lists(
        st.builds(
            Item,
            time_ns=st.integers(min_value=0, max_value=2**62),
            text=st.text(),
        ),
        max_size=10,
    )
)
def test_round_trip(items):
    data = b"".join(marshal_item(i) for i in items)
    assert _decode(data) == items


@pytest.mark.parametrize(
    "data",
    [
        b"x1:1:0:a\n",
        b":1:1:0:a",
        b":1:5:0:a\n",
        b":abc:1:0:a\n",
        b":1:x:0:a\n",
        b":1:1:0:ab\n",
        b":1:1",
    ],
)
def test_decode_errors(data):
    with pytest.raises(HistoryDecodeError):
        _decode(data)


def test_decode_error_names_item_index():
    data = marshal_item(Item(1, "ok")) + b":2:9:0:short\n"
    with pytest.raises(HistoryDecodeError, match="1th item"):
        _decode(data)


def _filled(*texts):
    h = CLHistory()
    for t in texts:
        h.add(t)
    return h


def test_prev_and_next_navigation():
    h = _filled("a", "b", "c")
    assert [(i.text, m) for i, m in [h.prev("")]] == [("c", True)]
    assert h.prev("")[0].text == "b"
    item, more = h.prev("")
    assert (item.text, more) == ("a", False)
    item, more = h.prev("")
    assert (item.text, more) == ("a", False)
    assert h.next("")[0].text == "b"
    item, more = h.next("")
    assert (item.text, more) == ("c", True)
    item, more = h.next("")
    assert (item.text, more) == ("", False)


def test_next_returns_edited_text_at_end():
    h = _filled("a", "b")
    h.prev("draft")
    item, more = h.next("draft")
    assert (item.text, more) == ("draft", False)


def test_prev_skips_items_equal_to_current():
    h = _filled("x", "y")
    item, more = h.prev("y")
    assert (item.text, more) == ("x", False)


def test_prev_on_empty_history_gives_current_text():
    h = CLHistory()
    item, more = h.prev("typed")
    assert (item.text, more) == ("typed", False)


def test_reset_restarts_navigation():
    h = _filled("a", "b", "c")
    h.prev("")
    h.prev("")
    h.reset()
    assert h.prev("")[0].text == "c"


def test_add_resets_navigation():
    h = _filled("a", "b")
    h.prev("")
    h.prev("")
    h.add("c")
    assert h.prev("")[0].text == "c"


def test_persistence(tmp_path):
    path = tmp_path / "history"
    h = CLHistory(path)
    h.add("first")
    h.add("second")
    reloaded = CLHistory(path)
    assert [i.text for i in reloaded.items] == ["first", "second"]
    assert reloaded.items == h.items


def test_missing_file_is_fine(tmp_path):
    h = CLHistory(tmp_path / "nope")
    assert h.items == []


def test_corrupt_file_raises(tmp_path):
    path = tmp_path / "history"
    path.write_bytes(b"garbage")
    with pytest.raises(HistoryDecodeError):
        CLHistory(path)


def test_memory_only_load_is_noop():
    h = _filled("a")
    h.load()
    assert [i.text for i in h.items] == ["a"]