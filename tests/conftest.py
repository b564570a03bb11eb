"""Shared test fixtures and data loading for availability-grid.

Scenario data lives in data/fixtures/scenarios/ as JSON files.  Grids are
described there compactly as {day: [[start, end], ...]} half-open runs of
selected blocks; this module turns those into WeeklyGrids and bitstrings.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"


def _load_json(path: Path):
    with open(path) as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Scenario loader
# ---------------------------------------------------------------------------
def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


# ---------------------------------------------------------------------------
# Grid factories
# ---------------------------------------------------------------------------
def make_day(runs: list[list[int]]) -> list[bool]:
    """96 cells with the given half-open runs set to True.

    >>> make_day([[0, 2]])[:3]
    [True, True, False]
    """
    cells = [False] * 96
    for start, end in runs:
        for i in range(start, end):
            cells[i] = True
    return cells


def make_grid(spec: dict[str, list[list[int]]] | None = None):
    """WeeklyGrid from {day: [[start, end], ...]}; unnamed days are empty."""
    from availability_grid.types import DAYS, WeeklyGrid

    spec = spec or {}
    return WeeklyGrid({day: make_day(spec.get(day, [])) for day in DAYS})


def make_bitstring(spec: dict[str, list[list[int]]] | None = None) -> str:
    """Wire form of make_grid(spec)."""
    from availability_grid.codec import encode

    return encode(make_grid(spec))


def feed_record(*entries: tuple[str, str]) -> str:
    """One framed feed record carrying the given (id, bitstring) entries."""
    payload = "|".join(f"{pid}:{bits}" for pid, bits in entries)
    return f"data: {payload}\n\n"


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def empty_grid():
    return make_grid()


@pytest.fixture
def store():
    """Store for local participant 'local' with nothing selected."""
    from availability_grid.store import GridStore

    return GridStore("local")


@pytest.fixture
def release():
    from availability_grid.drag import ReleaseListeners

    return ReleaseListeners()


@pytest.fixture
def commits():
    """List collecting every grid passed to a selector's commit hook."""
    return []


@pytest.fixture
def selector(store, release, commits):
    from availability_grid.drag import DragSelector, GridGeometry

    geometry = GridGeometry(left=0, top=0, column_width=100, row_height=20, header_height=30)
    return DragSelector(
        store,
        release_source=release,
        locator=geometry,
        on_commit=lambda grid: commits.append(grid.copy()),
    )
