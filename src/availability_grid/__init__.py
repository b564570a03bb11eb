"""availability-grid: shared weekly availability with live overlap."""

from availability_grid.codec import decode, encode, push_body
from availability_grid.colors import PALETTE, Background, Band, color_for, mix, render_cell, render_day
from availability_grid.config import Settings
from availability_grid.drag import (
    IDLE,
    Dragging,
    DragSelector,
    GridGeometry,
    Idle,
    ReleaseListeners,
)
from availability_grid.ranges import format_interval, ranges, summarize_day, time_label
from availability_grid.session import Session
from availability_grid.store import GridStore
from availability_grid.sync import RecordReader, SyncClient, parse_payload, record_payloads
from availability_grid.transport import GridTransport, TransportError
from availability_grid.types import (
    BITSTRING_LENGTH,
    BLOCK_MINUTES,
    BLOCKS_PER_DAY,
    DAYS,
    FormatError,
    Interval,
    WeeklyGrid,
)

__all__ = [
    "BITSTRING_LENGTH",
    "BLOCK_MINUTES",
    "BLOCKS_PER_DAY",
    "Background",
    "Band",
    "DAYS",
    "DragSelector",
    "Dragging",
    "FormatError",
    "GridGeometry",
    "GridStore",
    "GridTransport",
    "IDLE",
    "Idle",
    "Interval",
    "PALETTE",
    "RecordReader",
    "ReleaseListeners",
    "Session",
    "Settings",
    "SyncClient",
    "TransportError",
    "WeeklyGrid",
    "color_for",
    "decode",
    "encode",
    "format_interval",
    "mix",
    "parse_payload",
    "push_body",
    "ranges",
    "record_payloads",
    "render_cell",
    "render_day",
    "summarize_day",
    "time_label",
]
