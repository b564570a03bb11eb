"""Hypothesis property-based tests.

Properties that must hold for all valid inputs, verified by random generation.
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------
_day_cells = st.lists(st.booleans(), min_size=96, max_size=96)
_days = st.sampled_from(
    ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
)
_index = st.integers(min_value=0, max_value=95)


@st.composite
def weekly_grids(draw):
    from availability_grid.types import DAYS, WeeklyGrid

    return WeeklyGrid({day: draw(_day_cells) for day in DAYS})


# ---------------------------------------------------------------------------
# Property: decode(encode(g)) == g, length 672
# ---------------------------------------------------------------------------
class TestCodecRoundTrip:

    @given(grid=weekly_grids())
    @settings(max_examples=50)
    def test_round_trip(self, grid):
        from availability_grid.codec import decode, encode

        bits = encode(grid)
        assert len(bits) == 672
        assert set(bits) <= {"0", "1"}
        assert decode(bits) == grid

    @given(text=st.text(alphabet="01", max_size=800).filter(lambda s: len(s) != 672))
    @settings(max_examples=50)
    def test_wrong_length_always_rejected(self, text):
        import pytest

        from availability_grid.codec import decode
        from availability_grid.types import FormatError

        with pytest.raises(FormatError):
            decode(text)


# ---------------------------------------------------------------------------
# Property: ranges cover exactly the true cells
# ---------------------------------------------------------------------------
class TestRangeCoverage:

    @given(cells=_day_cells)
    @settings(max_examples=100)
    def test_ordered_disjoint_exact(self, cells):
        from availability_grid.ranges import ranges

        result = ranges(cells)
        for iv in result:
            assert 0 <= iv.start < iv.end <= 96
        for prev, nxt in zip(result, result[1:]):
            # Strictly increasing with a gap: adjacent runs would have merged.
            assert prev.end < nxt.start

        covered = {i for iv in result for i in range(iv.start, iv.end)}
        assert covered == {i for i, c in enumerate(cells) if c}


# ---------------------------------------------------------------------------
# Property: two clicks on one cell cancel
# ---------------------------------------------------------------------------
class TestDragIdempotence:

    @given(grid=weekly_grids(), day=_days, index=_index)
    @settings(max_examples=50)
    def test_double_click_restores(self, grid, day, index):
        from availability_grid.drag import DragSelector
        from availability_grid.store import GridStore

        store = GridStore("me")
        store.replace("me", grid.copy())
        sel = DragSelector(store)

        sel.click(day, index)
        assert store.local.get(day, index) is not grid.get(day, index)
        sel.click(day, index)
        assert store.local == grid

    @given(grid=weekly_grids(), day=_days, start=_index, end=_index, other=_days)
    @settings(max_examples=50)
    def test_drag_only_touches_its_range(self, grid, day, start, end, other):
        from availability_grid.drag import DragSelector
        from availability_grid.store import GridStore

        store = GridStore("me")
        store.replace("me", grid.copy())
        sel = DragSelector(store)
        initial = grid.get(day, start)

        sel.start(day, start)
        sel.paint(other, end)
        sel.paint(day, end)
        sel.release()

        lo, hi = min(start, end), max(start, end)
        for d in grid.days:
            for i in range(96):
                if d == day and lo <= i <= hi:
                    assert store.local.get(d, i) is (not initial)
                else:
                    assert store.local.get(d, i) is grid.get(d, i)


# ---------------------------------------------------------------------------
# Property: merge replaces named participants only
# ---------------------------------------------------------------------------
class TestMergeReplace:

    @given(g1=weekly_grids(), g2=weekly_grids(), g3=weekly_grids())
    @settings(max_examples=30)
    def test_absent_participants_untouched(self, g1, g2, g3):
        from availability_grid.codec import encode
        from availability_grid.store import GridStore
        from availability_grid.sync import SyncClient

        store = GridStore("me")
        store.replace("A", g1)
        store.replace("B", g2)

        SyncClient(store).apply_record(f"data: A:{encode(g3)}")

        assert store.get("A") == g3
        assert store.get("B") == g2
