"""Input validation for bitstrings and cell coordinates."""

from __future__ import annotations

from availability_grid.types import BITSTRING_LENGTH, BLOCKS_PER_DAY, DAYS


def validate_bitstring(s: str) -> list[str]:
    """Validate a wire bitstring. Returns list of error messages (empty = valid).

    Checks:
    - Value is a string
    - Length is exactly BITSTRING_LENGTH

    Characters other than '0'/'1' are not errors; decode reads them as False.
    """
    errors: list[str] = []

    if not isinstance(s, str):
        errors.append(f"bitstring must be a str, got {type(s).__name__}")
        return errors

    if len(s) != BITSTRING_LENGTH:
        errors.append(
            f"bitstring length {len(s)} != {BITSTRING_LENGTH} "
            f"({len(DAYS)} days x {BLOCKS_PER_DAY} blocks)"
        )

    return errors


def validate_cell(day: str, index: int) -> list[str]:
    """Validate a (day, index) cell address. Returns list of error messages."""
    errors: list[str] = []

    if day not in DAYS:
        errors.append(f"Invalid day key: {day!r} (must be one of {', '.join(DAYS)})")

    if isinstance(index, bool) or not isinstance(index, int):
        errors.append(f"Block index must be an int, got {index!r}")
    elif index < 0 or index >= BLOCKS_PER_DAY:
        errors.append(
            f"Block index {index} out of range (must be 0-{BLOCKS_PER_DAY - 1})"
        )

    return errors
