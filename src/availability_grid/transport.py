"""HTTP adapter for the push and pull boundaries."""

from __future__ import annotations

import logging
from typing import AsyncIterator
from urllib.parse import quote

import httpx

from availability_grid.config import Settings

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Raised when the pull feed cannot be opened or read."""


class GridTransport:
    """Push grids and subscribe to the merged feed over HTTP."""

    def __init__(
        self,
        settings: Settings | None = None,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.http = http or httpx.AsyncClient(
            base_url=self.settings.base_url,
            timeout=httpx.Timeout(
                connect=self.settings.connect_timeout,
                read=self.settings.push_read_timeout,
                write=self.settings.write_timeout,
                pool=self.settings.connect_timeout,
            ),
        )

    async def aclose(self) -> None:
        await self.http.aclose()

    async def push(self, body: dict[str, str]) -> bool:
        """POST one push body. Best effort: failures are logged, never raised."""
        try:
            response = await self.http.post(self.settings.push_path, json=body)
        except httpx.HTTPError as exc:
            logger.warning("push_failed: %s", exc)
            return False
        if response.status_code >= 400:
            logger.warning("push_rejected: status %d", response.status_code)
            return False
        return True

    async def pull(self, participant_id: str) -> AsyncIterator[bytes]:
        """Yield raw feed chunks until the server closes the stream.

        The read has no timeout. Raises TransportError if the stream cannot
        be opened or breaks mid-read.
        """
        path = self.settings.pull_url_path(quote(participant_id, safe=""))
        timeout = httpx.Timeout(
            connect=self.settings.connect_timeout,
            read=None,
            write=self.settings.write_timeout,
            pool=self.settings.connect_timeout,
        )
        try:
            async with self.http.stream(
                "GET",
                path,
                headers={"Accept": "text/event-stream"},
                timeout=timeout,
            ) as response:
                if response.status_code >= 400:
                    raise TransportError(f"pull_rejected: status {response.status_code}")
                async for chunk in response.aiter_bytes():
                    yield chunk
        except httpx.HTTPError as exc:
            raise TransportError(f"pull_connection_failed: {exc}") from exc
