"""ColorMixer: stable participant colors and hard-edged overlap backgrounds."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from availability_grid.types import BLOCKS_PER_DAY, check_cell

if TYPE_CHECKING:
    from availability_grid.store import GridStore


PALETTE: tuple[str, ...] = (
    "#ffadad",
    "#ffd6a5",
    "#fdffb6",
    "#caffbf",
    "#9bf6ff",
    "#a0c4ff",
    "#bdb2ff",
    "#ffc6ff",
)

NEUTRAL = "#fff"


def first_code_unit(s: str) -> int:
    """First UTF-16 code unit of a non-empty string.

    Characters outside the BMP contribute their leading surrogate, so ids
    map to the same palette entry as in browser clients.
    """
    cp = ord(s[0])
    if cp > 0xFFFF:
        return 0xD800 + ((cp - 0x10000) >> 10)
    return cp


def color_for(participant_id: str) -> str:
    """Palette color chosen by the first UTF-16 code unit, mod 8.

    Collisions are expected. An empty id maps to the first palette entry.
    """
    if not participant_id:
        return PALETTE[0]
    return PALETTE[first_code_unit(participant_id) % len(PALETTE)]


@dataclass(frozen=True)
class Band:
    """One solid color over the horizontal span [start, end) of a cell (0..1)."""

    color: str
    start: float
    end: float


@dataclass(frozen=True)
class Background:
    """Rendered cell background. No bands means the neutral background."""

    bands: tuple[Band, ...] = ()

    @property
    def is_neutral(self) -> bool:
        return not self.bands

    def css(self) -> str:
        """CSS background value.

        Multiple bands repeat each color at both of its stops so adjacent
        bands meet with a hard edge.
        """
        if not self.bands:
            return NEUTRAL
        if len(self.bands) == 1:
            return self.bands[0].color
        stops = ", ".join(
            f"{b.color} {b.start * 100:.2f}%, {b.color} {b.end * 100:.2f}%"
            for b in self.bands
        )
        return f"linear-gradient(to right, {stops})"


def mix(colors: Sequence[str]) -> Background:
    """Split a cell into len(colors) equal bands, in the given order."""
    n = len(colors)
    return Background(
        tuple(Band(color, i / n, (i + 1) / n) for i, color in enumerate(colors))
    )


def selected_by(
    store: GridStore,
    day: str,
    index: int,
    participants: Sequence[str] | None = None,
) -> list[str]:
    """Participants whose grid is True at (day, index).

    Order follows `participants` if given, else store order. Ids missing
    from the store count as having nothing selected.
    """
    check_cell(day, index)
    ids = store.participants() if participants is None else participants
    return [pid for pid in ids if store.get(pid)[day][index]]


def render_cell(
    store: GridStore,
    day: str,
    index: int,
    participants: Sequence[str] | None = None,
) -> Background:
    """Background for one cell of the shared view."""
    return mix([color_for(pid) for pid in selected_by(store, day, index, participants)])


def render_day(
    store: GridStore,
    day: str,
    participants: Sequence[str] | None = None,
) -> list[Background]:
    """Backgrounds for a whole day column."""
    return [render_cell(store, day, i, participants) for i in range(BLOCKS_PER_DAY)]
