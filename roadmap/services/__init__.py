from roadmap.services.notion import NotionClient
from roadmap.services.normalizer import (
    FIELD_RULES,
    FieldCandidate,
    FieldRule,
    NormalizedItem,
    PropertyType,
    collect_image_urls,
    extract_display_text,
    normalize,
    normalize_all,
    resolve_field,
)
from roadmap.services.roadmap import RoadmapService

__all__ = [
    "NotionClient",
    "FIELD_RULES",
    "FieldCandidate",
    "FieldRule",
    "NormalizedItem",
    "PropertyType",
    "collect_image_urls",
    "extract_display_text",
    "normalize",
    "normalize_all",
    "resolve_field",
    "RoadmapService",
]
