"""Histogram model: scale, cursor, selection and the dot field to draw."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Sequence

from nerdlog.histogram_scale import get_optimal_scale

__all__ = ["FieldData", "Histogram"]


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _trem(a: int, b: int) -> int:
    """Remainder whose sign follows the dividend."""
    return a - b * _tdiv(a, b)


@dataclass
class FieldData:
    """The computed dot field of a histogram and its drawing parameters.

    ``dots`` is indexed as ``[y][x]``. ``sel_scale_dots`` holds two rows:
    the selection scale and the cursor mark, cut to the selected part;
    ``sel_scale_offset`` is its X offset in dots.
    """

    dots: list[list[bool]]
    data_bins_in_chart_bar: int
    chart_bar_width: int
    dot_y_scale: int
    max_value: int
    y_scale: int
    effective_width_dots: int
    effective_width_runes: int
    sel_scale_dots: list[list[bool]]
    sel_scale_offset: int
    cursor_val: int
    selected_vals_sum: int


class Histogram:
    """A histogram over an integer range, with a cursor and a selection.

    Values are bucketed into bins of ``bin_size``; ``data`` maps the start
    of a bin to its value. A selection start of 0 means no selection.
    """

    def __init__(
        self, bin_size: int = 1, snapper: Callable[[int], int] | None = None
    ) -> None:
        self.start = 0
        self.end = 0
        self.bin_size = bin_size
        self.data: Mapping[int, int] = {}
        self.snapper: Callable[[int], int] = snapper or (lambda n: n)
        self.marks: list[int] = []
        self.selected: Callable[[int, int], None] | None = None
        self.cursor = 0
        self.selection_start = 0
        self.field_data: FieldData | None = None

    @property
    def _bins_per_bar(self) -> int:
        return 1 if self.field_data is None else self.field_data.data_bins_in_chart_bar

    @property
    def _chart_bar_width(self) -> int:
        return 1 if self.field_data is None else self.field_data.chart_bar_width

    @property
    def _step(self) -> int:
        return self.bin_size * self._bins_per_bar

    def set_range(self, start: int, end: int) -> Histogram:
        """Set the range, putting the cursor on the last bar and dropping selection."""
        self.start = start
        self.end = end
        self.cursor = self.align_cursor(end - self._step, False)
        self.selection_start = 0
        return self

    def align_cursor(self, cursor: int, is_ceiling: bool) -> int:
        """Align ``cursor`` to a chart bar boundary, down or (if asked) up."""
        divisor = self._step
        offset = cursor - self.start
        remainder = _trem(offset, divisor)
        offset -= remainder
        if is_ceiling and remainder > 0:
            offset += divisor
        return offset + self.start

    def set_bin_size(self, bin_size: int) -> Histogram:
        self.bin_size = bin_size
        return self

    def set_data(self, data: Mapping[int, int]) -> Histogram:
        self.data = data
        return self

    def set_snapper(self, snapper: Callable[[int], int]) -> Histogram:
        """Set the function snapping a number of data bins per bar to a nicer one."""
        self.snapper = snapper
        return self

    def set_marks(self, marks: Sequence[int]) -> Histogram:
        """Set the X axis marks, used as stops by the long cursor moves."""
        self.marks = sorted(marks)
        return self

    def set_selected_func(self, handler: Callable[[int, int], None] | None) -> Histogram:
        """Set the handler called with ``(start, end)`` when a selection is finished."""
        self.selected = handler
        return self

    def gen_field_data(
        self, width: int, height: int, focused: bool = False
    ) -> FieldData | None:
        """Compute the dot field of ``width`` x ``height`` dots.

        The range is snapped to the chosen scale, the result is remembered
        and the cursor is realigned to it. Returns None if the field is too
        small.
        """
        if height <= 0:
            return None
        scale = get_optimal_scale(self.start, self.end, self.bin_size, width, self.snapper)
        if scale is None:
            return None

        self.start, self.end = scale.start, scale.end
        bins = scale.data_bins_in_chart_bar
        bar_width = scale.chart_bar_width

        sel_start, sel_end = self.get_selection()
        if sel_start == 0 or sel_end == 0:
            sel_start = self.cursor
            sel_end = self.cursor + bins * self.bin_size

        bars = []
        for x_data in range(0, scale.num_data_bins, bins):
            keys = [self.start + (x_data + i) * self.bin_size for i in range(bins)]
            value = sum(self.data.get(k, 0) for k in keys)
            selected = any(sel_start <= k < sel_end for k in keys)
            at_cursor = self.cursor in keys
            bars.append((value, selected, at_cursor))

        max_value = max((value for value, _, _ in bars), default=0)
        dot_y_scale = _tdiv(max_value + height - 1, height)

        dots = [[False] * width for _ in range(height)]
        sel_rows = [[False] * width for _ in range(2)]
        sel_offset_start = -1
        sel_offset_end = -1
        offset_last = -1
        cursor_val = 0
        selected_sum = 0

        for bar_idx, (value, selected, at_cursor) in enumerate(bars):
            x_chart = bar_idx * bar_width
            columns = range(x_chart, min(x_chart + bar_width, width))
            if at_cursor:
                cursor_val = value
            if selected:
                selected_sum += value
            inverted = focused and selected

            for y in range(height):
                on = value > y * dot_y_scale
                if not on and not inverted:
                    break
                if inverted:
                    on = not on
                if on:
                    for x in columns:
                        dots[height - y - 1][x] = True

            for x in columns:
                offset_last = x + (x & 1)
                if selected:
                    if sel_offset_start == -1:
                        sel_offset_start = x - (x & 1)
                    sel_rows[0][x] = True
                elif sel_offset_start != -1 and sel_offset_end == -1:
                    sel_offset_end = offset_last
                if at_cursor:
                    sel_rows[1][x] = True

        if sel_offset_end == -1:
            sel_offset_end = offset_last
        if sel_offset_start == -1:
            sel_rows = [[], []]
        else:
            sel_rows = [row[:sel_offset_end][sel_offset_start:] for row in sel_rows]

        effective_width_dots = scale.num_data_bins // bins * bar_width
        effective_width_runes = (effective_width_dots + 1) // 2

        field_data = FieldData(
            dots=dots,
            data_bins_in_chart_bar=bins,
            chart_bar_width=bar_width,
            dot_y_scale=dot_y_scale,
            max_value=max_value,
            y_scale=dot_y_scale * height,
            effective_width_dots=effective_width_dots,
            effective_width_runes=effective_width_runes,
            sel_scale_dots=sel_rows,
            sel_scale_offset=sel_offset_start,
            cursor_val=cursor_val,
            selected_vals_sum=selected_sum,
        )
        self.field_data = field_data
        self.cursor = self.align_cursor(self.cursor, False)
        return field_data

    def get_selection(self) -> tuple[int, int]:
        """Return the selection as ``(start, end)``, end exclusive, or ``(0, 0)``."""
        if self.selection_start == 0:
            return 0, 0
        sel_start, sel_end = sorted((self.selection_start, self.cursor))
        return sel_start, sel_end + self._step

    def is_selection_active(self) -> bool:
        return self.selection_start != 0

    @property
    def _max_cursor(self) -> int:
        return self.align_cursor(self.end - self._step, True)

    def move_left(self) -> None:
        self.cursor = max(self.cursor - self._step, self.start)

    def move_right(self) -> None:
        self.cursor = min(self.cursor + self._step, self._max_cursor)

    def move_left_long(self) -> None:
        """Move the cursor to the closest mark before it, or to the start."""
        target = self.start
        for mark in self.marks:
            if mark >= self.cursor:
                break
            target = mark
        self.cursor = self.align_cursor(target, False)

    def move_right_long(self) -> None:
        """Move the cursor to the next mark after it, or to the end."""
        max_cursor = self._max_cursor
        self.move_right()
        for mark in self.marks:
            if mark > max_cursor:
                break
            if mark >= self.cursor:
                self.cursor = self.align_cursor(mark, False)
                return
        self.cursor = max_cursor

    def move_beginning(self) -> None:
        self.cursor = self.start

    def move_end(self) -> None:
        self.cursor = self._max_cursor

    def toggle_selection(self) -> None:
        """Start a selection at the cursor, or finish the active one.

        Finishing calls the selected handler, if any, with the selection.
        """
        if self.selection_start != 0:
            if self.selected is not None:
                self.selected(*self.get_selection())
            self.end_selection()
        else:
            self.selection_start = self.cursor

    def end_selection(self) -> None:
        """Drop the selection without reporting it."""
        self.selection_start = 0

    def swap_selection_ends(self) -> None:
        """Swap the cursor and the selection start, if a selection is active."""
        if self.selection_start > 0:
            self.cursor, self.selection_start = self.selection_start, self.cursor

    def val_to_coord(self, value: int) -> int:
        """Return the X coordinate, in dots, of ``value``."""
        return _tdiv(
            _tdiv(value - self.start, self._bins_per_bar) * self._chart_bar_width,
            self.bin_size,
        )