"""SyncClient — frame the pull feed and merge remote grids into the store.

Feed format (server-sent-events style):

    data: <id>:<bitstring>|<id>:<bitstring>\\n
    \\n

Records are separated by a blank line. Only `data:` lines carry payload.
Each entry replaces that participant's grid wholesale; participants absent
from a record keep their last known grid.
"""

from __future__ import annotations

import codecs
import logging
from typing import AsyncIterable, AsyncIterator, Iterable, Iterator

from availability_grid.codec import decode
from availability_grid.store import GridStore
from availability_grid.types import FormatError, WeeklyGrid

logger = logging.getLogger(__name__)

RECORD_SEPARATOR = "\n\n"
DATA_PREFIX = "data:"
ENTRY_SEPARATOR = "|"
ID_SEPARATOR = ":"


class RecordReader:
    """Buffered framer: chunks in, complete records out.

    Bytes are decoded incrementally as UTF-8, so a multi-byte character split
    across chunks is reassembled. The trailing partial record stays buffered
    until a later chunk completes it. One reader serves one feed subscription.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    @property
    def pending(self) -> str:
        """Text received but not yet framed into a record."""
        return self._buffer

    def feed(self, chunk: bytes | str) -> list[str]:
        """Append a chunk and return every record it completed."""
        if isinstance(chunk, bytes):
            text = self._decoder.decode(chunk)
        else:
            text = chunk
        self._buffer += text
        *complete, self._buffer = self._buffer.split(RECORD_SEPARATOR)
        return complete

    def iter_records(self, chunks: Iterable[bytes | str]) -> Iterator[str]:
        for chunk in chunks:
            yield from self.feed(chunk)

    async def records(self, chunks: AsyncIterable[bytes | str]) -> AsyncIterator[str]:
        """Lazily yield records as chunks arrive. Ends when the feed ends."""
        async for chunk in chunks:
            for record in self.feed(chunk):
                yield record


def record_payloads(record: str) -> list[str]:
    """Trimmed, non-empty `data:` payloads of one record, in order."""
    payloads: list[str] = []
    for line in record.split("\n"):
        if not line.startswith(DATA_PREFIX):
            continue
        payload = line[len(DATA_PREFIX):].strip()
        if payload:
            payloads.append(payload)
    return payloads


def parse_entry(entry: str) -> tuple[str, WeeklyGrid]:
    """Parse `participantId:bitstring`. Raises FormatError."""
    participant_id, sep, bitstring = entry.rpartition(ID_SEPARATOR)
    if not sep:
        raise FormatError(f"entry has no {ID_SEPARATOR!r} separator", value=entry)
    if not participant_id:
        raise FormatError("entry has an empty participant id", value=entry)
    return participant_id, decode(bitstring)


def parse_payload(payload: str) -> tuple[dict[str, WeeklyGrid], list[str]]:
    """Decode every entry of a payload independently.

    Returns (grids by participant, error messages). A bad entry is reported
    and skipped; it never prevents the other entries from decoding. If an id
    repeats, its last entry wins.
    """
    grids: dict[str, WeeklyGrid] = {}
    errors: list[str] = []
    for i, entry in enumerate(payload.split(ENTRY_SEPARATOR)):
        try:
            participant_id, grid = parse_entry(entry.strip())
        except FormatError as e:
            errors.append(f"entry {i}: {e.reason}")
            continue
        grids[participant_id] = grid
    return grids, errors


class SyncClient:
    """Applies feed records to a GridStore."""

    def __init__(self, store: GridStore) -> None:
        self.store = store
        self.records_applied = 0

    def apply_record(self, record: str) -> list[str]:
        """Merge one record. Returns the skipped-entry error messages."""
        errors: list[str] = []
        for payload in record_payloads(record):
            grids, payload_errors = parse_payload(payload)
            for message in payload_errors:
                logger.warning("Skipping malformed feed entry: %s", message)
            errors.extend(payload_errors)
            for participant_id, grid in grids.items():
                if participant_id == self.store.local_id:
                    logger.debug("Feed overwrote local participant %s", participant_id)
                self.store.replace(participant_id, grid)
        self.records_applied += 1
        return errors

    async def run(self, chunks: AsyncIterable[bytes | str]) -> None:
        """Consume the feed until it closes.

        A failure inside one record is logged and the loop moves on; only
        the end of the chunk stream ends this coroutine.
        """
        reader = RecordReader()
        async for record in reader.records(chunks):
            try:
                self.apply_record(record)
            except Exception:
                logger.exception("Failed to apply feed record")
        if reader.pending.strip():
            logger.debug("Feed closed with %d unframed characters", len(reader.pending))
        logger.info("Feed closed after %d records", self.records_applied)

    def run_sync(self, chunks: Iterable[bytes | str]) -> None:
        """Blocking counterpart of run() for already-buffered feeds."""
        reader = RecordReader()
        for record in reader.iter_records(chunks):
            try:
                self.apply_record(record)
            except Exception:
                logger.exception("Failed to apply feed record")
