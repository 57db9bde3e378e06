import logging

from aiohttp import web

from roadmap.config import Config, load_config
from roadmap.handlers import api, pages
from roadmap.services.notion import NotionClient
from roadmap.services.roadmap import RoadmapService
from roadmap.ui.client import RoadmapApiClient

LOGGER = logging.getLogger(__name__)


async def create_app(config: Config | None = None, notion: NotionClient | None = None) -> web.Application:
    """Create aiohttp application."""
    if config is None:
        config = load_config()
    if notion is None:
        notion = NotionClient(config.notion_token)

    service = RoadmapService(config, notion)

    app = web.Application(middlewares=[api.cors_middleware])
    app["config"] = config
    app["notion"] = notion
    app["service"] = service

    # UI pages read the same JSON the API serves, in-process unless a
    # remote deployment is configured.
    api_client: RoadmapApiClient | None = None
    if config.api_base_url:
        api_client = RoadmapApiClient(config.api_base_url)
        app["fetch_roadmap"] = api_client.fetch
    else:
        app["fetch_roadmap"] = service.fetch_payload

    async def on_shutdown(_: web.Application) -> None:
        LOGGER.info("Shutting down...")
        await notion.close()
        if api_client is not None:
            await api_client.close()
        LOGGER.info("Shutdown complete")

    app.on_shutdown.append(on_shutdown)

    async def healthcheck(_: web.Request) -> web.Response:
        return web.Response(text="ok")

    app.router.add_get("/healthz", healthcheck)
    api.setup_routes(app)
    pages.setup_routes(app)

    LOGGER.info(
        "HTTP endpoints registered: GET /, GET /project/{id}, GET|OPTIONS /api/roadmap, GET /healthz "
        "(ui source=%s)",
        config.api_base_url or "in-process",
    )
    return app


def main() -> None:
    """Run the server."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    config = load_config()
    LOGGER.info("Starting server on port %s", config.port)
    web.run_app(create_app(config), host="0.0.0.0", port=config.port)


if __name__ == "__main__":
    main()
