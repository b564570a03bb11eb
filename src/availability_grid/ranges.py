"""RangeSummarizer: contiguous selected intervals for display.

Pure functions of the current cells; nothing here mutates a grid.
"""

from __future__ import annotations

from typing import Sequence

from availability_grid.types import BLOCK_MINUTES, Interval


def ranges(cells: Sequence[bool]) -> list[Interval]:
    """Half-open runs of True in left-to-right order.

    A run reaching the last cell closes at len(cells).
    """
    result: list[Interval] = []
    run_start: int | None = None

    for i, cell in enumerate(cells):
        if cell:
            if run_start is None:
                run_start = i
        elif run_start is not None:
            result.append(Interval(run_start, i))
            run_start = None

    if run_start is not None:
        result.append(Interval(run_start, len(cells)))

    return result


def time_label(index: int) -> str:
    """'HH:MM' at the start of block `index`. Index 96 is '24:00'."""
    minutes = index * BLOCK_MINUTES
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_interval(interval: Interval) -> str:
    """'09:00 ~ 10:30' style label."""
    return f"{time_label(interval.start)} ~ {time_label(interval.end)}"


def summarize_day(cells: Sequence[bool]) -> list[str]:
    """Formatted labels for every selected run of one day."""
    return [format_interval(iv) for iv in ranges(cells)]
