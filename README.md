# nerdlog

Building blocks for a terminal log viewer, written in plain Python with no
runtime dependencies.

## Modules

- `nerdlog.blhistory` has `BLHistory`, an in-memory history that works like
  the back and forward buttons of a browser. `add(s)` stores a string. `prev()`
  and `next()` step through the history and return an `Item` (with `time_ns`
  and `text`). They return `None` when there is nowhere to go. If you call
  `add()` after stepping back, the newer entries are dropped.
- `nerdlog.clhistory` has `CLHistory`, a command-line history like a shell's.
  You can give it a file name, in which case it loads the file (a missing file
  is fine) and appends every added entry to it. The file holds one record per
  entry in the form `:<unix nanos>:<data length>:<extra length>:<extra><data>`,
  followed by a newline.
  - `prev(s)` and `next(s)` return `(item, has_more)` and skip entries equal to
    the current input `s`. If you step past the newest entry, you get back the
    text that was being edited.
  - `reset()` ends navigation.
  - `HistoryDecoder(stream).decode()` reads records from a binary stream and
    raises `HistoryDecodeError` on malformed input.
  - `marshal_item(item)` writes a single record.
- `nerdlog.cmdtext` has two helpers:
  - `split_command(cmd)` splits a command line into whitespace-separated
    fields.
  - `capitalize_first_rune(s)` upper-cases the first character.
- `nerdlog.histogram_scale` holds the layout helpers for a histogram drawn with
  quadrant block characters:
  - `get_optimal_scale(start, end, bin_size, width, snapper)` returns a
    `HistogramScale`, or `None` if the histogram does not fit.
  - `dots_to_lines(dots)` renders a `[y][x]` field of dots as text, two dots
    per character in each direction.
  - `clear_tview_formatting(text)` strips `[color]`-style tags.
  - `highlight_rune(s, index, prefix, suffix)` wraps one character in the
    given prefix and suffix.
- `nerdlog.histogram` has `Histogram`, a model with a cursor and a selection:
  - `set_range`, `set_bin_size`, `set_data`, `set_snapper` and `set_marks`
    configure it.
  - `gen_field_data(width, height, focused)` computes a `FieldData` dot field
    and snaps the range to the chosen scale.
  - The cursor moves with `move_left`, `move_right`, `move_left_long`,
    `move_right_long`, `move_beginning` and `move_end`.
  - `toggle_selection`, `end_selection`, `swap_selection_ends` and
    `get_selection` manage the selection. When a selection is finished, the
    handler set with `set_selected_func` is called.

## Example

```python
from nerdlog.blhistory import BLHistory
from nerdlog.clhistory import CLHistory
from nerdlog.histogram_scale import clear_tview_formatting, get_optimal_scale

history = BLHistory()
history.add("first")
history.add("second")
print(history.prev().text)  # first

cmds = CLHistory()  # kept in memory only
cmds.add("foo")
cmds.add("bar")
item, has_more = cmds.prev("")
print(item.text, has_more)  # bar True

scale = get_optimal_scale(0, 3600, 60, 100, lambda n: n)
print(scale.num_data_bins, scale.data_bins_in_chart_bar)  # 60 1

print(clear_tview_formatting("[yellow]Yellow text"))  # Yellow text
```

## What this package does not do

This is a library of parts and does not include a program. It has no command
to run and no terminal screen. It does not connect to log streams, fetch or
query logs, manage a `:set`-style option store, or read any configuration.
The histogram code computes layout and dot fields only; drawing them to a
terminal is left to the caller.

## Tests

```
pip install -e .[test]
pytest
```