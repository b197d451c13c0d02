"""Scale calculation and text rendering helpers for the histogram."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

__all__ = [
    "QBLOCKS",
    "HistogramScale",
    "get_optimal_scale",
    "dots_to_lines",
    "clear_tview_formatting",
    "highlight_rune",
]

# Quadrant block characters indexed by a 4-bit mask:
# bit 3 = top-left, bit 2 = top-right, bit 1 = bottom-left, bit 0 = bottom-right.
QBLOCKS = (
    " ", "▗", "▖", "▄", "▝", "▐", "▞", "▟",
    "▘", "▚", "▌", "▙", "▀", "▜", "▛", "█",
)


def _trunc_div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _trunc_rem(a: int, b: int) -> int:
    """Remainder whose sign follows the dividend."""
    return a - b * _trunc_div(a, b)


@dataclass(frozen=True)
class HistogramScale:
    """Key parameters for drawing a histogram.

    ``start`` and ``end`` are the snapped range and must be used instead of
    the original one. ``chart_bar_width`` is measured in chart dots; one
    character cell holds two dots horizontally.
    """

    start: int
    end: int
    num_data_bins: int
    data_bins_in_chart_bar: int
    chart_bar_width: int


def get_optimal_scale(
    start: int,
    end: int,
    bin_size: int,
    width: int,
    snapper: Callable[[int], int],
) -> HistogramScale | None:
    """Compute the largest and most detailed histogram that fits ``width`` dots.

    ``bin_size`` is the finest resolution of the data; ``snapper`` takes a
    number of data bins per chart bar and returns a possibly larger, "nicer"
    number. Returns None if the range or the width is too small.
    """
    if width <= 0:
        return None

    num_data_bins = _trunc_div(end - start, bin_size)
    if num_data_bins == 0:
        return None

    bins_per_bar = snapper(_trunc_div(num_data_bins + width - 1, width))
    divisor = bins_per_bar * bin_size

    start_rem = _trunc_rem(start, divisor)
    if start_rem > 0:
        start -= start_rem

    end_rem = _trunc_rem(end, divisor)
    if end_rem > 0:
        end += divisor - end_rem

    if start_rem > 0 or end_rem > 0:
        num_data_bins = _trunc_div(end - start, bin_size)
        bins_per_bar = snapper(_trunc_div(num_data_bins + width - 1, width))

    num_bars = _trunc_div(num_data_bins, bins_per_bar)
    if num_bars == 0:
        return None

    return HistogramScale(
        start=start,
        end=end,
        num_data_bins=num_data_bins,
        data_bins_in_chart_bar=bins_per_bar,
        chart_bar_width=width // num_bars,
    )


def dots_to_lines(dots: Sequence[Sequence[bool]]) -> list[str]:
    """Render a ``[y][x]`` field of dots as lines of quadrant characters.

    Each character covers a 2x2 square of dots, so both dimensions must be
    even.
    """
    if len(dots) % 2:
        raise ValueError(f"field height must be even, got {len(dots)}")

    lines: list[str] = []
    rows = iter(dots)
    for top, bottom in zip(rows, rows):
        if len(top) % 2 or len(bottom) != len(top):
            raise ValueError("field rows must have the same even width")
        cells = iter(zip(top, bottom))
        chars = []
        for (tl, bl), (tr, br) in zip(cells, cells):
            mask = (tl << 3) | (tr << 2) | (bl << 1) | int(br)
            chars.append(QBLOCKS[mask])
        lines.append("".join(chars))
    return lines


def clear_tview_formatting(text: str) -> str:
    """Strip formatting tags like ``[red]`` or ``[-]`` from ``text``.

    ``[[`` yields a literal ``[``, and an escaped tag such as ``[red[]``
    yields the literal ``[red]``.
    """
    out: list[str] = []
    in_tag = False
    escaped = False
    tag_start = 0
    n = len(text)
    i = 0
    while i < n:
        c = text[i]
        nxt = text[i + 1] if i + 1 < n else ""

        if in_tag:
            if c == "]":
                if escaped:
                    out.append("[" + text[tag_start : i - 1] + "]")
                    escaped = False
                in_tag = False
            elif c == "[" and nxt == "]":
                escaped = True
        elif c == "[":
            if nxt == "[":
                out.append("[")
                i += 1
            else:
                in_tag = True
                tag_start = i + 1
        else:
            out.append(c)
        i += 1

    return "".join(out)


def highlight_rune(s: str, index: int, prefix: str, suffix: str) -> str:
    """Wrap the character at ``index`` with ``prefix`` and ``suffix``.

    An out-of-range index leaves ``s`` unchanged.
    """
    if index < 0 or index >= len(s):
        return s
    return s[:index] + prefix + s[index] + suffix + s[index + 1 :]