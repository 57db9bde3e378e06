"""
Roadmap view state.

A view owns the transient UI state of one page (listing or detail):
loading / error / empty / ready, plus the normalized items. ``load()``
issues exactly one fetch; a newer ``load()`` or ``close()`` makes the
result of an older one stale, and stale results are dropped instead of
being merged into the current state.
"""

import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

from roadmap.services.normalizer import NormalizedItem, normalize_all
from roadmap.utils.constants import DEFAULT_STATUS
from roadmap.utils.exceptions import RoadmapFetchError

LOGGER = logging.getLogger(__name__)

GENERIC_ERROR = "An error occurred while loading the roadmap"
NO_DATA_ERROR = "No data returned from the server"

Fetcher = Callable[[str | None], Awaitable[dict[str, Any]]]


class ViewState(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    READY = "ready"


class RoadmapView:
    def __init__(
        self,
        fetch: Fetcher,
        item_id: str | None = None,
        default_status: str = DEFAULT_STATUS,
    ) -> None:
        self._fetch = fetch
        self.item_id = item_id
        self.default_status = default_status
        self.state = ViewState.LOADING
        self.items: list[NormalizedItem] = []
        self.error: str | None = None
        self._generation = 0
        self._closed = False

    @property
    def item(self) -> NormalizedItem | None:
        """First item, for detail pages."""
        return self.items[0] if self.items else None

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Tear the view down; loads still in flight will be discarded."""
        self._closed = True

    def _is_stale(self, generation: int) -> bool:
        return self._closed or generation != self._generation

    def _apply(self, state: ViewState, items: list[NormalizedItem], error: str | None) -> None:
        self.items = items
        self.error = error
        self.state = state

    def _parse(self, payload: Any) -> list[NormalizedItem]:
        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            LOGGER.warning("No results in roadmap response: %r", payload)
            raise RoadmapFetchError(NO_DATA_ERROR)
        return normalize_all(results, self.default_status)

    async def load(self) -> ViewState:
        """Fetch once and replace the view state with the outcome."""
        self._generation += 1
        generation = self._generation
        self.state = ViewState.LOADING
        self.error = None

        try:
            payload = await self._fetch(self.item_id)
            items = self._parse(payload)
        except Exception as e:
            if self._is_stale(generation):
                LOGGER.debug("Discarding failed stale roadmap load (generation %d)", generation)
                return self.state
            LOGGER.warning("Roadmap load failed (item_id=%s): %s", self.item_id, e)
            self._apply(ViewState.ERROR, [], str(e) or GENERIC_ERROR)
            return self.state

        if self._is_stale(generation):
            LOGGER.debug("Discarding stale roadmap load (generation %d)", generation)
            return self.state

        self._apply(ViewState.READY if items else ViewState.EMPTY, items, None)
        return self.state
