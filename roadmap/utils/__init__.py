from roadmap.utils.formatting import (
    parse_date,
    format_date_long,
    format_number,
    escape_html,
)
from roadmap.utils.constants import (
    DEFAULT_STATUS,
    STATUS_STYLES,
    IMAGE_NAME_MARKERS,
    PAGE_SIZE,
)
from roadmap.utils.exceptions import (
    NotionAPIError,
    RoadmapFetchError,
)

__all__ = [
    "parse_date",
    "format_date_long",
    "format_number",
    "escape_html",
    "DEFAULT_STATUS",
    "STATUS_STYLES",
    "IMAGE_NAME_MARKERS",
    "PAGE_SIZE",
    "NotionAPIError",
    "RoadmapFetchError",
]
