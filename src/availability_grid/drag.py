"""DragSelector — pointer/touch gestures to grid mutations.

State machine:

    Idle --start(day, i)--> Dragging(day, i, initial_value)   toggles cell i
    Dragging --paint(day, j)--> Dragging                       [min(i,j), max(i,j)] := not initial_value
    Dragging --release()--> Idle                               commit hook fires

A click is start + release on one cell: exactly one toggle.
Painting is confined to the day column the gesture started in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Protocol, Union

from availability_grid.types import BLOCKS_PER_DAY, DAYS, WeeklyGrid, check_cell
from availability_grid.store import GridStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    """No gesture in progress."""


@dataclass(frozen=True)
class Dragging:
    """A gesture in progress.

    initial_value is the starting cell's value before the gesture toggled it;
    every painted cell is set to its inverse.
    """

    day: str
    start_index: int
    initial_value: bool


DragState = Union[Idle, Dragging]

IDLE = Idle()


class CellLocator(Protocol):
    """Resolves a screen coordinate to a grid cell, or None if off-grid."""

    def cell_at(self, x: float, y: float) -> tuple[str, int] | None: ...


class ReleaseSource(Protocol):
    """Document-wide release events (mouse-up / touch-end anywhere)."""

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]: ...


class ReleaseListeners:
    """Registry of window-level release callbacks.

    subscribe() returns the matching unsubscribe, so a holder can release
    exactly what it acquired.
    """

    def __init__(self) -> None:
        self._callbacks: list[Callable[[], None]] = []

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            # Identity match; the same callable may be subscribed twice.
            for i, cb in enumerate(self._callbacks):
                if cb is callback:
                    del self._callbacks[i]
                    return

        return unsubscribe

    def fire(self) -> None:
        """Deliver one release event to every current subscriber."""
        for callback in list(self._callbacks):
            callback()

    def __len__(self) -> int:
        return len(self._callbacks)


@dataclass(frozen=True)
class GridGeometry:
    """Geometric hit-testing for a rendered week grid.

    One column per day in DAYS order, one row per block, below an optional
    header row. Coordinates are in the same space as left/top.
    """

    left: float
    top: float
    column_width: float
    row_height: float
    header_height: float = 0.0

    def __post_init__(self) -> None:
        if self.column_width <= 0 or self.row_height <= 0:
            raise ValueError(
                f"GridGeometry needs positive cell sizes, got "
                f"column_width={self.column_width}, row_height={self.row_height}"
            )

    def cell_at(self, x: float, y: float) -> tuple[str, int] | None:
        if x < self.left or y < self.top + self.header_height:
            return None
        col = int((x - self.left) // self.column_width)
        row = int((y - self.top - self.header_height) // self.row_height)
        if col >= len(DAYS) or row >= BLOCKS_PER_DAY:
            return None
        return DAYS[col], row


class DragSelector:
    """Turns gestures into edits of the store's local grid.

    Holds a release subscription only while a gesture is active, and calls
    `on_commit(local_grid)` each time a gesture ends.
    """

    def __init__(
        self,
        store: GridStore,
        release_source: ReleaseSource | None = None,
        locator: CellLocator | None = None,
        on_commit: Callable[[WeeklyGrid], None] | None = None,
    ) -> None:
        self.store = store
        self.release_source = release_source
        self.locator = locator
        self.on_commit = on_commit
        self._state: DragState = IDLE
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def is_dragging(self) -> bool:
        return isinstance(self._state, Dragging)

    # -- transitions -------------------------------------------------------

    def start(self, day: str, index: int) -> None:
        """Begin a gesture on (day, index) and toggle that cell.

        Ignored while another gesture is active.
        """
        check_cell(day, index)
        if isinstance(self._state, Dragging):
            logger.debug("start(%s, %d) ignored: gesture already active", day, index)
            return

        grid = self.store.local
        initial_value = grid[day][index]
        grid[day][index] = not initial_value
        self._state = Dragging(day, index, initial_value)

        if self.release_source is not None:
            self._unsubscribe = self.release_source.subscribe(self.release)

    def paint(self, day: str, index: int) -> None:
        """Extend the active gesture to (day, index).

        No-op when idle or when the cell lies in another day column.
        """
        state = self._state
        if not isinstance(state, Dragging) or day != state.day:
            return
        check_cell(day, index)
        self.store.local.fill(day, state.start_index, index, not state.initial_value)

    def release(self) -> None:
        """End the active gesture, wherever the release happened."""
        if not isinstance(self._state, Dragging):
            return
        self._state = IDLE
        if self._unsubscribe is not None:
            unsubscribe, self._unsubscribe = self._unsubscribe, None
            unsubscribe()
        if self.on_commit is not None:
            self.on_commit(self.store.local)

    # -- input adapters ----------------------------------------------------

    def pointer_down(self, day: str, index: int) -> None:
        self.start(day, index)

    def pointer_enter(self, day: str, index: int) -> None:
        self.paint(day, index)

    def pointer_up(self) -> None:
        self.release()

    def touch_start(self, day: str, index: int) -> None:
        self.start(day, index)

    def touch_move(self, x: float, y: float) -> None:
        """Touch moves carry no target cell; resolve the point first."""
        if not self.is_dragging:
            return
        if self.locator is None:
            raise RuntimeError("touch_move needs a CellLocator")
        cell = self.locator.cell_at(x, y)
        if cell is None:
            return
        self.paint(*cell)

    def touch_end(self) -> None:
        self.release()

    def click(self, day: str, index: int) -> None:
        """Zero-distance drag: a single toggle and one commit."""
        self.start(day, index)
        self.release()
