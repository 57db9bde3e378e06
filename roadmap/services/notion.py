import asyncio
import json
import logging
from typing import Any

import aiohttp

from roadmap.utils.constants import PAGE_SIZE
from roadmap.utils.exceptions import NotionAPIError, NotionUnavailableError, error_for_status

NOTION_VERSION = "2022-06-28"
NOTION_API_URL = "https://api.notion.com/v1"
LOGGER = logging.getLogger(__name__)


class NotionClient:
    """
    Async Notion API client for the roadmap database.
    Owns one aiohttp session, created lazily on the running loop.
    """

    def __init__(self, token: str, base_url: str = NOTION_API_URL, timeout: float = 10) -> None:
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None
        self._session_loop: asyncio.AbstractEventLoop | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        loop = asyncio.get_running_loop()
        if self._session and not self._session.closed:
            if self._session_loop and self._session_loop is loop and not loop.is_closed():
                return self._session
            # Session belongs to another event loop
            LOGGER.info("Closing stale session from different event loop")
            try:
                await self._session.close()
            except (aiohttp.ClientError, RuntimeError) as e:
                LOGGER.warning("Error closing stale session: %s", e)

        self._session = aiohttp.ClientSession(
            headers={
                "Authorization": f"Bearer {self._token}",
                "Notion-Version": NOTION_VERSION,
                "Content-Type": "application/json",
            },
            timeout=aiohttp.ClientTimeout(total=self._timeout),
        )
        self._session_loop = loop
        return self._session

    async def close(self) -> None:
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
        self._session_loop = None

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send one request. Failures are raised as NotionAPIError, never retried."""
        session = await self._get_session()
        url = f"{self._base_url}{path}"

        try:
            async with session.request(method, url, json=json) as response:
                if response.status < 400:
                    return await response.json()

                payload = (await response.text()).strip()
                short_payload = payload[:200] if payload else "<empty>"
                LOGGER.error("Notion API error %s %s: %s", response.status, url, short_payload)
                message = _error_message(payload) or f"Notion API error {response.status}"
                raise error_for_status(response.status, message)

        except NotionAPIError:
            raise
        except asyncio.TimeoutError as e:
            LOGGER.exception("Notion API timeout %s %s", method, url)
            raise NotionUnavailableError(f"Notion API timeout: {method} {url}") from e
        except (aiohttp.ContentTypeError, ValueError) as e:
            LOGGER.exception("Notion API returned non-JSON body %s %s", method, url)
            raise NotionUnavailableError(f"Notion API returned an unexpected response: {method} {url}") from e
        except aiohttp.ClientError as e:
            LOGGER.exception("Notion API request failed %s %s", method, url)
            raise NotionUnavailableError(f"Notion API request failed: {e}") from e

    async def query_database(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        limit: int = PAGE_SIZE,
    ) -> dict[str, Any]:
        """Query a database. Returns the raw Notion response (``results`` etc.)."""
        payload: dict[str, Any] = {"page_size": min(limit, PAGE_SIZE)}
        if filter:
            payload["filter"] = filter

        LOGGER.info("Querying Notion database %s (filtered=%s)", database_id, bool(filter))
        data = await self._request("POST", f"/databases/{database_id}/query", json=payload)
        LOGGER.info("Notion database %s returned %d items", database_id, len(data.get("results") or []))
        return data

    async def get_page(self, page_id: str) -> dict[str, Any]:
        """Retrieve a single page by ID."""
        return await self._request("GET", f"/pages/{page_id}")


def _error_message(payload: str) -> str | None:
    """Pull ``message`` out of a Notion error body ({"object": "error", ...})."""
    if not payload:
        return None
    try:
        body = json.loads(payload)
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None
