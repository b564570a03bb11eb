"""Boundary: Codec — WeeklyGrid <-> 672-character bitstring.

Days are concatenated in DAYS order (Monday first), 96 characters each,
'1' for a selected block and '0' otherwise.
"""

from __future__ import annotations

from availability_grid.schema import validate_bitstring
from availability_grid.types import BLOCKS_PER_DAY, DAYS, FormatError, WeeklyGrid


def encode(grid: WeeklyGrid) -> str:
    """Serialise a grid. The result is always BITSTRING_LENGTH characters."""
    return "".join(
        "".join("1" if cell else "0" for cell in grid[day]) for day in DAYS
    )


def decode(s: str) -> WeeklyGrid:
    """Parse a bitstring into a fresh grid.

    Raises FormatError if the length is not exactly BITSTRING_LENGTH.
    Any character other than '1' decodes as False.
    """
    errors = validate_bitstring(s)
    if errors:
        raise FormatError("; ".join(errors), value=s if isinstance(s, str) else None)

    days: dict[str, list[bool]] = {}
    for i, day in enumerate(DAYS):
        chunk = s[i * BLOCKS_PER_DAY:(i + 1) * BLOCKS_PER_DAY]
        days[day] = [c == "1" for c in chunk]
    return WeeklyGrid(days)


def push_body(participant_id: str, grid: WeeklyGrid) -> dict[str, str]:
    """Single-entry push payload: {participant_id: bitstring}."""
    return {participant_id: encode(grid)}
