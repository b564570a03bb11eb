"""Session: one participant's store, selector, feed and transport wired together.

This is the composition point an embedding UI talks to. Gestures go to
`session.selector`; the rendered view reads `session.store` through the
colors and ranges helpers.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from availability_grid.codec import push_body
from availability_grid.drag import CellLocator, DragSelector, ReleaseListeners, ReleaseSource
from availability_grid.store import GridStore
from availability_grid.sync import SyncClient

if TYPE_CHECKING:
    from availability_grid.config import Settings
    from availability_grid.transport import GridTransport
    from availability_grid.types import WeeklyGrid

logger = logging.getLogger(__name__)


class Session:
    """Core session for a single local participant.

    The participant id is injected; the session never creates or stores one.
    Each push carries the whole grid, so `outbox` holds at most the newest
    unsent body. Pushes go out one at a time, oldest first.
    """

    def __init__(
        self,
        participant_id: str,
        transport: GridTransport | None = None,
        release: ReleaseSource | None = None,
        locator: CellLocator | None = None,
    ) -> None:
        self.participant_id = participant_id
        self.transport = transport
        self.store = GridStore(participant_id)
        self.release = release if release is not None else ReleaseListeners()
        self.selector = DragSelector(
            self.store,
            release_source=self.release,
            locator=locator,
            on_commit=self._on_commit,
        )
        self.sync = SyncClient(self.store)
        self.outbox: list[dict[str, str]] = []
        self._flush_lock = asyncio.Lock()
        self._tasks: set[asyncio.Task] = set()

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> Session:
        """Session for `settings.participant_id` over an HTTP transport."""
        from availability_grid.transport import GridTransport

        if not settings.participant_id:
            raise ValueError("settings.participant_id is not set")
        return cls(settings.participant_id, transport=GridTransport(settings), **kwargs)

    def _on_commit(self, grid: WeeklyGrid) -> None:
        # A newer grid supersedes any body still waiting.
        self.outbox[:] = [push_body(self.participant_id, grid)]
        if self.transport is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop yet; flush() delivers later.
            return
        task = loop.create_task(self.flush())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def flush(self) -> int:
        """Send queued push bodies. Returns how many were accepted.

        Only one flush sends at a time, so bodies reach the server in commit
        order and the newest grid lands last.
        """
        if self.transport is None:
            return 0
        sent = 0
        async with self._flush_lock:
            while self.outbox:
                body = self.outbox.pop(0)
                if await self.transport.push(body):
                    sent += 1
        return sent

    async def drain(self) -> None:
        """Wait for scheduled push tasks."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def run_pull(self) -> None:
        """Subscribe to the feed once and merge it until it closes."""
        from availability_grid.transport import TransportError

        if self.transport is None:
            raise RuntimeError("run_pull needs a transport")
        try:
            await self.sync.run(self.transport.pull(self.participant_id))
        except TransportError as exc:
            logger.warning("Feed ended: %s", exc)
