import logging
import uuid
from typing import Any

from roadmap.config import Config, ConfigValidationError
from roadmap.services.normalizer import normalize_all
from roadmap.services.notion import NotionClient
from roadmap.utils.exceptions import NotionNotFoundError

LOGGER = logging.getLogger(__name__)


def _page_id(value: str) -> str | None:
    """Canonical dashed form of a Notion page id, or None if it is not one."""
    try:
        return str(uuid.UUID(value))
    except ValueError:
        return None


def _compact_id(value: Any) -> str:
    return value.replace("-", "").lower() if isinstance(value, str) else ""


class RoadmapService:
    """Fetches roadmap rows from the configured Notion database."""

    def __init__(self, config: Config, notion: NotionClient) -> None:
        self._config = config
        self._notion = notion

    def check_config(self) -> None:
        """Fail before any network call when credentials are missing."""
        missing = self._config.missing()
        if missing:
            raise ConfigValidationError(
                ", ".join(f"{name} environment variable is not set" for name in missing)
            )

    def _in_roadmap(self, page: Any) -> bool:
        """True for a non-archived page whose parent is the configured database."""
        if not isinstance(page, dict) or page.get("archived") or page.get("in_trash"):
            return False
        parent = page.get("parent")
        parent_id = parent.get("database_id") if isinstance(parent, dict) else None
        return bool(parent_id) and _compact_id(parent_id) == _compact_id(self._config.database_id)

    async def fetch_results(self, item_id: str | None = None) -> list[dict[str, Any]]:
        """Return raw Notion pages, optionally narrowed to one item."""
        self.check_config()
        database_id = self._config.database_id

        if item_id and not self._config.id_property:
            page_id = _page_id(item_id)
            if page_id is None:
                LOGGER.info("Roadmap item id %r is not a Notion page id", item_id)
                return []
            try:
                page = await self._notion.get_page(page_id)
            except NotionNotFoundError:
                LOGGER.info("Roadmap item %s not found", page_id)
                return []
            if not self._in_roadmap(page):
                LOGGER.info("Page %s is not a live row of database %s", page_id, database_id)
                return []
            return [page]

        filter = None
        if item_id:
            filter = {"property": self._config.id_property, "rich_text": {"equals": item_id}}

        data = await self._notion.query_database(database_id, filter=filter)
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            raise ValueError("Notion response has no 'results' list")
        return results

    async def fetch_payload(self, item_id: str | None = None, normalized: bool = False) -> dict[str, Any]:
        """
        Build the /api/roadmap response body.

        ``propertyNames`` lists every property name seen in the results, in
        first-seen order. With ``normalized`` the flattened items are
        included under ``items``.
        """
        results = await self.fetch_results(item_id)

        property_names: list[str] = []
        for page in results:
            properties = page.get("properties") if isinstance(page, dict) else None
            for name in properties or {}:
                if name not in property_names:
                    property_names.append(name)

        payload: dict[str, Any] = {
            "success": True,
            "results": results,
            "propertyNames": property_names,
        }
        if normalized:
            payload["items"] = [
                item.to_dict() for item in normalize_all(results, self._config.default_status)
            ]
        return payload
