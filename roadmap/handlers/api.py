"""/api/roadmap: raw Notion rows as JSON, with CORS for browser clients."""
import logging
from datetime import datetime, timezone

from aiohttp import web

from roadmap.config import Config
from roadmap.services.roadmap import RoadmapService

LOGGER = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS",
    "Access-Control-Allow-Headers": (
        "X-CSRF-Token, X-Requested-With, Accept, Accept-Version, Content-Length, "
        "Content-MD5, Content-Type, Date, X-Api-Version"
    ),
}

TRUTHY = {"1", "true", "yes", "on"}


@web.middleware
async def cors_middleware(request: web.Request, handler) -> web.StreamResponse:
    """Attach CORS headers to /api/* responses and answer preflights."""
    if not request.path.startswith("/api/"):
        return await handler(request)
    if request.method == "OPTIONS":
        return web.Response(status=200, headers=CORS_HEADERS)
    response = await handler(request)
    response.headers.update(CORS_HEADERS)
    return response


def _log_error(request: web.Request, config: Config, error: Exception) -> None:
    LOGGER.error(
        "Roadmap API failure: %s: %s | context: timestamp=%s NOTION_API_KEY=%s "
        "NOTION_DATABASE_ID=%s method=%s url=%s",
        type(error).__name__,
        error,
        datetime.now(timezone.utc).isoformat(),
        "*** (exists)" if config.notion_token else "Not set",
        config.database_id or "Not set",
        request.method,
        request.rel_url,
        exc_info=error,
    )


async def roadmap_api(request: web.Request) -> web.Response:
    """GET /api/roadmap[?id=...][&normalized=1]"""
    service: RoadmapService = request.app["service"]
    config: Config = request.app["config"]
    item_id = request.query.get("id", "").strip() or None
    normalized = request.query.get("normalized", "").lower() in TRUTHY

    try:
        payload = await service.fetch_payload(item_id, normalized=normalized)
    except Exception as e:
        _log_error(request, config, e)
        return web.json_response(
            {
                "error": "Internal Server Error",
                "message": str(e) or "Failed to fetch roadmap data",
                "type": type(e).__name__,
            },
            status=500,
        )

    LOGGER.info("Roadmap API: returned %d items (item_id=%s)", len(payload["results"]), item_id)
    return web.json_response(payload)


async def roadmap_preflight(_: web.Request) -> web.Response:
    return web.Response(status=200, headers=CORS_HEADERS)


def setup_routes(app: web.Application) -> None:
    app.router.add_get("/api/roadmap", roadmap_api)
    app.router.add_route("OPTIONS", "/api/roadmap", roadmap_preflight)
