"""ASCII visualisation for development-time verification.

This module is dev-only and not imported by production code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from availability_grid.types import BLOCKS_PER_DAY, DAYS

if TYPE_CHECKING:
    from availability_grid.store import GridStore
    from availability_grid.types import WeeklyGrid


# 24-hour timeline, each char = 30 minutes (2 blocks, 48 chars per day)
_BLOCKS_PER_CHAR = 2
_CHARS_PER_DAY = BLOCKS_PER_DAY // _BLOCKS_PER_CHAR


def _header() -> str:
    header_hours = "".join(f"{h:02d}" if h % 3 == 0 else "  " for h in range(24))
    return f"{'':>10s}  {header_hours}"


def show_grid(grid: WeeklyGrid) -> str:
    """Print one participant's week.

    Legend: '#' = both blocks of the half hour selected, '+' = one, '.' = none.
    Returns the string and also prints to stdout.
    """
    lines: list[str] = [_header()]

    for day in DAYS:
        cells = grid[day]
        row = []
        for c in range(_CHARS_PER_DAY):
            pair = cells[c * _BLOCKS_PER_CHAR:(c + 1) * _BLOCKS_PER_CHAR]
            selected = sum(pair)
            row.append("#" if selected == len(pair) else "+" if selected else ".")
        lines.append(f"{day[:3].title():>10s}  {''.join(row)}")

    result = "\n".join(lines)
    print(result)
    return result


def show_store(store: GridStore) -> str:
    """Print the overlap of every participant in the store.

    Legend: '.' = nobody, 'A'-'Z' = only that participant, '1'-'9' = that
    many participants overlap (first block of each half hour).
    Returns the string and also prints to stdout.
    """
    lines: list[str] = [_header()]

    label_chars = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    labels: dict[str, str] = {}
    for pid in store.participants():
        labels[pid] = label_chars[len(labels) % len(label_chars)]

    for day in DAYS:
        row = []
        for c in range(_CHARS_PER_DAY):
            index = c * _BLOCKS_PER_CHAR
            who = [pid for pid, grid in store.items() if grid[day][index]]
            if not who:
                row.append(".")
            elif len(who) == 1:
                row.append(labels[who[0]])
            else:
                row.append(str(min(len(who), 9)))
        lines.append(f"{day[:3].title():>10s}  {''.join(row)}")

    legend_parts = [f"{v}={k}" for k, v in labels.items()]
    lines.append(f"\nLegend: . = nobody, digits = overlap count, {', '.join(legend_parts)}")

    result = "\n".join(lines)
    print(result)
    return result
