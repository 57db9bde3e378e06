from roadmap.ui.client import RoadmapApiClient
from roadmap.ui.render import render_detail_page, render_list_page, status_classes
from roadmap.ui.view import RoadmapView, ViewState

__all__ = [
    "RoadmapApiClient",
    "RoadmapView",
    "ViewState",
    "render_detail_page",
    "render_list_page",
    "status_classes",
]
