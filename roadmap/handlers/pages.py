"""HTML pages: the roadmap listing and the per-item detail page."""
import logging

from aiohttp import web

from roadmap.config import Config
from roadmap.ui.render import render_detail_page, render_list_page
from roadmap.ui.view import RoadmapView, ViewState

LOGGER = logging.getLogger(__name__)


async def _load_view(request: web.Request, item_id: str | None = None) -> RoadmapView:
    config: Config = request.app["config"]
    view = RoadmapView(
        request.app["fetch_roadmap"],
        item_id=item_id,
        default_status=config.default_status,
    )
    try:
        await view.load()
    finally:
        view.close()
    return view


def _html(text: str, status: int = 200) -> web.Response:
    return web.Response(text=text, status=status, content_type="text/html")


async def roadmap_index(request: web.Request) -> web.Response:
    view = await _load_view(request)
    status = 502 if view.state is ViewState.ERROR else 200
    return _html(render_list_page(view), status=status)


async def project_detail(request: web.Request) -> web.Response:
    item_id = request.match_info["id"]
    view = await _load_view(request, item_id=item_id)
    if view.state is ViewState.ERROR:
        status = 502
    elif view.item is None:
        LOGGER.info("Project %s not found", item_id)
        status = 404
    else:
        status = 200
    return _html(render_detail_page(view), status=status)


def setup_routes(app: web.Application) -> None:
    app.router.add_get("/", roadmap_index)
    app.router.add_get("/project/{id}", project_detail)
