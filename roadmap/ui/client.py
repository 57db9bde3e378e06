import asyncio
import logging
from typing import Any

import aiohttp

from roadmap.utils.exceptions import RoadmapFetchError

LOGGER = logging.getLogger(__name__)


class RoadmapApiClient:
    """Fetches /api/roadmap from a remote deployment of this service."""

    def __init__(self, base_url: str, timeout: float = 10) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"Content-Type": "application/json"},
                timeout=aiohttp.ClientTimeout(total=self._timeout),
            )
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def fetch(self, item_id: str | None = None) -> dict[str, Any]:
        """GET /api/roadmap; non-2xx answers raise RoadmapFetchError."""
        session = await self._get_session()
        url = f"{self._base_url}/api/roadmap"
        params = {"id": item_id} if item_id else None

        try:
            async with session.get(url, params=params) as response:
                try:
                    data = await response.json(content_type=None)
                except ValueError:
                    data = None

                if response.status >= 400:
                    message = data.get("message") if isinstance(data, dict) else None
                    if not isinstance(message, str) or not message:
                        message = f"Failed to fetch roadmap data ({response.status})"
                    raise RoadmapFetchError(message, status=response.status)

                if not isinstance(data, dict):
                    raise RoadmapFetchError("No data returned from the server", status=response.status)
                return data

        except asyncio.TimeoutError as e:
            LOGGER.warning("Roadmap API timeout %s", url)
            raise RoadmapFetchError("Timed out while loading the roadmap") from e
        except aiohttp.ClientError as e:
            LOGGER.warning("Roadmap API request failed %s: %s", url, e)
            raise RoadmapFetchError(f"Failed to fetch roadmap data: {e}") from e
