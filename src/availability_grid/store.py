"""GridStore — participant id -> WeeklyGrid, the single source of truth.

Mutated locally by DragSelector and remotely by SyncClient.
"""

from __future__ import annotations

from typing import Iterator

from availability_grid.types import WeeklyGrid


class GridStore:
    """In-memory grids keyed by participant id.

    The local participant's grid exists from construction onwards.
    Iteration order is first-seen order, local participant first.
    """

    def __init__(self, local_id: str) -> None:
        if not isinstance(local_id, str) or not local_id:
            raise ValueError(f"local participant id must be a non-empty str, got {local_id!r}")
        self.local_id = local_id
        self._grids: dict[str, WeeklyGrid] = {local_id: WeeklyGrid.empty()}

    @property
    def local(self) -> WeeklyGrid:
        return self._grids[self.local_id]

    def get(self, participant_id: str) -> WeeklyGrid:
        """Grid for a participant; unknown ids read as an all-false grid.

        The fallback grid is not stored.
        """
        grid = self._grids.get(participant_id)
        if grid is None:
            return WeeklyGrid.empty()
        return grid

    def replace(self, participant_id: str, grid: WeeklyGrid) -> None:
        """Replace a participant's grid wholesale (last update wins)."""
        self._grids[participant_id] = grid

    def participants(self) -> list[str]:
        return list(self._grids)

    def items(self) -> Iterator[tuple[str, WeeklyGrid]]:
        return iter(self._grids.items())

    def __contains__(self, participant_id: object) -> bool:
        return participant_id in self._grids

    def __len__(self) -> int:
        return len(self._grids)

    def __iter__(self) -> Iterator[str]:
        return iter(self._grids)
