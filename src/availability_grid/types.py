"""Shared types: WeeklyGrid, Interval and FormatError."""

from __future__ import annotations

from dataclasses import dataclass

# Wire order of days. Monday first, Sunday last.
DAYS: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

BLOCK_MINUTES = 15
BLOCKS_PER_DAY = 24 * 60 // BLOCK_MINUTES  # 96
BITSTRING_LENGTH = len(DAYS) * BLOCKS_PER_DAY  # 672


def check_cell(day: str, index: int) -> None:
    """Raise ValueError unless (day, index) addresses a cell."""
    from availability_grid.schema import validate_cell

    errors = validate_cell(day, index)
    if errors:
        raise ValueError("; ".join(errors))


@dataclass
class WeeklyGrid:
    """Mutable 7 x 96 availability matrix for one participant.

    Invariants:
        - keys are exactly DAYS
        - every day holds exactly BLOCKS_PER_DAY booleans
    """

    days: dict[str, list[bool]]

    def __post_init__(self) -> None:
        if set(self.days) != set(DAYS):
            missing = [d for d in DAYS if d not in self.days]
            extra = [d for d in self.days if d not in DAYS]
            raise ValueError(
                f"WeeklyGrid needs exactly the days {DAYS}; "
                f"missing={missing}, unexpected={extra}"
            )
        for day in DAYS:
            cells = self.days[day]
            if len(cells) != BLOCKS_PER_DAY:
                raise ValueError(
                    f"{day}: expected {BLOCKS_PER_DAY} blocks, got {len(cells)}"
                )
        # Normalise key order and cell types so equality is structural.
        self.days = {day: [bool(c) for c in self.days[day]] for day in DAYS}

    @classmethod
    def empty(cls) -> WeeklyGrid:
        """All-false grid."""
        return cls({day: [False] * BLOCKS_PER_DAY for day in DAYS})

    def __getitem__(self, day: str) -> list[bool]:
        return self.days[day]

    def get(self, day: str, index: int) -> bool:
        check_cell(day, index)
        return self.days[day][index]

    def set(self, day: str, index: int, value: bool) -> None:
        check_cell(day, index)
        self.days[day][index] = value

    def fill(self, day: str, start: int, end: int, value: bool) -> None:
        """Set every cell in the inclusive range [start, end] of one day."""
        check_cell(day, start)
        check_cell(day, end)
        lo, hi = min(start, end), max(start, end)
        cells = self.days[day]
        for i in range(lo, hi + 1):
            cells[i] = value

    def copy(self) -> WeeklyGrid:
        """Deep copy; the cell lists are not shared."""
        return WeeklyGrid({day: list(cells) for day, cells in self.days.items()})

    def count(self) -> int:
        """Number of selected blocks across the week."""
        return sum(sum(cells) for cells in self.days.values())


@dataclass(frozen=True)
class Interval:
    """Half-open block range [start, end) within one day."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def minutes(self) -> int:
        """Covered duration in minutes."""
        return self.length * BLOCK_MINUTES


class FormatError(ValueError):
    """Raised when a bitstring or feed entry does not match the wire format."""

    def __init__(self, reason: str, value: str | None = None) -> None:
        self.reason = reason
        self.value = value
        super().__init__(f"Malformed wire data: {reason}")
