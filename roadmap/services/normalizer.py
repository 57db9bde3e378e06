"""
Property normalizer: flattens a Notion page into a display-ready record.

A Notion page carries a mapping of property name -> typed value, where the
value's ``type`` tag names the key holding its payload:

    {"type": "select", "select": {"name": "In Progress"}}

Roadmap databases are not uniform: the title may live in "Name", "Feature"
or "Project", the status may be a select or a native status property, and
so on. Each logical field is therefore resolved from an ordered table of
candidate property names (see FIELD_RULES), matched case-insensitively.

Every function here is total: unknown or malformed shapes degrade to empty
strings and defaults, nothing raises.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from roadmap.utils.constants import DEFAULT_STATUS, IMAGE_NAME_MARKERS, UNTITLED
from roadmap.utils.formatting import format_number

LOGGER = logging.getLogger(__name__)


class PropertyType(str, Enum):
    """Every property value tag the normalizer understands."""
    TITLE = "title"
    RICH_TEXT = "rich_text"
    SELECT = "select"
    STATUS = "status"
    MULTI_SELECT = "multi_select"
    DATE = "date"
    NUMBER = "number"
    CHECKBOX = "checkbox"
    URL = "url"
    EMAIL = "email"
    PHONE_NUMBER = "phone_number"
    FILES = "files"
    PEOPLE = "people"
    FORMULA = "formula"
    RELATION = "relation"
    ROLLUP = "rollup"
    CREATED_TIME = "created_time"
    LAST_EDITED_TIME = "last_edited_time"
    CREATED_BY = "created_by"
    LAST_EDITED_BY = "last_edited_by"
    UNIQUE_ID = "unique_id"


@dataclass(frozen=True)
class FieldCandidate:
    """One property name to try for a field, optionally restricted to a type."""
    name: str
    expected_type: PropertyType | None = None


@dataclass(frozen=True)
class FieldRule:
    candidates: tuple[FieldCandidate, ...]
    prefer_type: PropertyType | None = None


def _candidates(*names: str) -> tuple[FieldCandidate, ...]:
    return tuple(FieldCandidate(name) for name in names)


# Order matters: fields are resolved top to bottom and a property promoted
# to one field is not reused by a later one.
FIELD_RULES: dict[str, FieldRule] = {
    "title": FieldRule(
        _candidates("Name", "Title", "Feature", "Project", "Task", "Item", "Description"),
        prefer_type=PropertyType.TITLE,
    ),
    "status": FieldRule(
        _candidates("Status", "State", "Stage", "Phase"),
        prefer_type=PropertyType.STATUS,
    ),
    "description": FieldRule(_candidates("Description", "Summary", "Details", "Notes")),
    "due_date": FieldRule(
        _candidates("Due Date", "Due_Date", "DueDate", "Due", "Deadline", "Target Date", "Date"),
    ),
    "priority": FieldRule(_candidates("Priority", "Importance")),
}


@dataclass
class NormalizedItem:
    """Display-ready projection of one roadmap page."""
    id: str
    title: str
    status: str
    description: str = ""
    due_date: str = ""
    priority: str = ""
    images: list[str] = field(default_factory=list)
    extra_fields: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status,
            "description": self.description,
            "dueDate": self.due_date,
            "priority": self.priority,
            "images": list(self.images),
            "extraFields": dict(self.extra_fields),
        }


# ==================== Value extraction ====================

def property_type(value: Any) -> PropertyType | None:
    """Return the tag of a property value, inferring it when ``type`` is absent."""
    if not isinstance(value, Mapping):
        return None
    tag = value.get("type")
    if isinstance(tag, str):
        try:
            return PropertyType(tag)
        except ValueError:
            return None
    for member in PropertyType:
        if member.value in value:
            return member
    return None


def _text_spans(spans: Any) -> str:
    if not isinstance(spans, list):
        return ""
    parts = []
    for span in spans:
        if not isinstance(span, Mapping):
            continue
        text = span.get("plain_text")
        if not isinstance(text, str):
            inner = span.get("text")
            text = inner.get("content") if isinstance(inner, Mapping) else None
        if isinstance(text, str):
            parts.append(text)
    return " ".join(parts).strip()


def _name(payload: Any) -> str:
    if not isinstance(payload, Mapping):
        return ""
    name = payload.get("name")
    return name if isinstance(name, str) else ""


def _names(items: Any, fallback: str) -> str:
    if not isinstance(items, list):
        return ""
    return ", ".join(_name(item) or fallback for item in items if isinstance(item, Mapping))


def _multi_select(payload: Any) -> str:
    if not isinstance(payload, list):
        return ""
    return ", ".join(name for name in (_name(item) for item in payload) if name)


def _date(payload: Any) -> str:
    if not isinstance(payload, Mapping):
        return ""
    start = payload.get("start")
    return start if isinstance(start, str) else ""


def _number(payload: Any) -> str:
    # bool is an int subclass; a checkbox value is not a number
    if isinstance(payload, bool) or not isinstance(payload, (int, float)):
        return ""
    return format_number(payload)


def _checkbox(payload: Any) -> str:
    if not isinstance(payload, bool):
        return ""
    return "Yes" if payload else "No"


def _plain_string(payload: Any) -> str:
    return payload if isinstance(payload, str) else ""


def _person(payload: Any) -> str:
    if not isinstance(payload, Mapping):
        return ""
    return _name(payload) or "Unknown"


def _relation(payload: Any) -> str:
    return "Related" if isinstance(payload, list) and payload else ""


def _rollup(payload: Any) -> str:
    return "Rollup"


def _unique_id(payload: Any) -> str:
    if not isinstance(payload, Mapping):
        return ""
    number = _number(payload.get("number"))
    if not number:
        return ""
    prefix = payload.get("prefix")
    return f"{prefix}-{number}" if isinstance(prefix, str) and prefix else number


_FORMULA_EXTRACTORS: dict[str, Callable[[Any], str]] = {
    "string": _plain_string,
    "number": _number,
    "boolean": _checkbox,
    "date": _date,
}


def _formula(payload: Any) -> str:
    if not isinstance(payload, Mapping):
        return ""
    result_type = payload.get("type")
    extractor = _FORMULA_EXTRACTORS.get(result_type) if isinstance(result_type, str) else None
    if extractor is None:
        return ""
    return extractor(payload.get(result_type))


_EXTRACTORS: dict[PropertyType, Callable[[Any], str]] = {
    PropertyType.TITLE: _text_spans,
    PropertyType.RICH_TEXT: _text_spans,
    PropertyType.SELECT: _name,
    PropertyType.STATUS: _name,
    PropertyType.MULTI_SELECT: _multi_select,
    PropertyType.DATE: _date,
    PropertyType.NUMBER: _number,
    PropertyType.CHECKBOX: _checkbox,
    PropertyType.URL: _plain_string,
    PropertyType.EMAIL: _plain_string,
    PropertyType.PHONE_NUMBER: _plain_string,
    PropertyType.FILES: lambda payload: _names(payload, "File"),
    PropertyType.PEOPLE: lambda payload: _names(payload, "Unknown"),
    PropertyType.FORMULA: _formula,
    PropertyType.RELATION: _relation,
    PropertyType.ROLLUP: _rollup,
    PropertyType.CREATED_TIME: _plain_string,
    PropertyType.LAST_EDITED_TIME: _plain_string,
    PropertyType.CREATED_BY: _person,
    PropertyType.LAST_EDITED_BY: _person,
    PropertyType.UNIQUE_ID: _unique_id,
}


def extract_display_text(value: Any) -> str:
    """Render one property value as a human-readable string ("" when unusable)."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    tag = property_type(value)
    if tag is None:
        return ""
    return _EXTRACTORS[tag](value.get(tag.value))


# ==================== Field resolution ====================

def _properties(page: Any) -> Mapping[str, Any]:
    if not isinstance(page, Mapping):
        return {}
    properties = page.get("properties")
    return properties if isinstance(properties, Mapping) else {}


def _as_candidate(candidate: FieldCandidate | str) -> FieldCandidate:
    if isinstance(candidate, FieldCandidate):
        return candidate
    return FieldCandidate(candidate)


def _resolve(
    properties: Mapping[str, Any],
    candidates: Iterable[FieldCandidate | str],
    prefer_type: PropertyType | None = None,
    exclude: set[str] | frozenset[str] = frozenset(),
) -> tuple[str | None, str]:
    """Return (property name, text) of the first usable candidate."""
    if prefer_type is not None:
        for name, value in properties.items():
            if name in exclude or property_type(value) is not prefer_type:
                continue
            text = extract_display_text(value)
            if text:
                return name, text

    for candidate in map(_as_candidate, candidates):
        wanted = candidate.name.strip().lower()
        for name, value in properties.items():
            if name in exclude or not isinstance(name, str) or name.strip().lower() != wanted:
                continue
            if candidate.expected_type is not None and property_type(value) is not candidate.expected_type:
                continue
            text = extract_display_text(value)
            if text:
                return name, text

    return None, ""


def resolve_field(
    page: Any,
    candidates: Iterable[FieldCandidate | str],
    prefer_type: PropertyType | None = None,
) -> str:
    """
    Resolve one logical field of a page.

    Properties typed ``prefer_type`` win first, then candidate names in
    order (case-insensitive). Returns "" when nothing yields text.
    """
    _, text = _resolve(_properties(page), candidates, prefer_type)
    return text


# ==================== Images ====================

def is_image_property(name: Any) -> bool:
    if not isinstance(name, str):
        return False
    lowered = name.lower()
    return any(marker in lowered for marker in IMAGE_NAME_MARKERS)


def _file_url(entry: Any) -> str:
    if isinstance(entry, str):
        return entry
    if not isinstance(entry, Mapping):
        return ""
    for key in ("file", "external"):
        hosted = entry.get(key)
        if isinstance(hosted, Mapping) and isinstance(hosted.get("url"), str):
            return hosted["url"]
    return ""


def _image_urls(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, list):
        return [url for url in map(_file_url, value) if url]
    if property_type(value) is PropertyType.FILES:
        return _image_urls(value.get("files"))
    text = extract_display_text(value)
    return [text] if text else []


def collect_image_urls(page: Any) -> list[str]:
    """URLs from every image-named property, in property order, duplicates kept."""
    urls: list[str] = []
    for name, value in _properties(page).items():
        if is_image_property(name):
            urls.extend(_image_urls(value))
    return urls


# ==================== Normalization ====================

def _fallback_title(page_id: str) -> str:
    return f"Item {page_id[:6]}" if page_id else UNTITLED


def normalize(page: Any, default_status: str = DEFAULT_STATUS) -> NormalizedItem:
    """Flatten one Notion page into a NormalizedItem. Never raises."""
    properties = _properties(page)
    page_id = page.get("id") if isinstance(page, Mapping) else None
    page_id = page_id if isinstance(page_id, str) else ""

    images = collect_image_urls(page)
    claimed = {name for name in properties if is_image_property(name)}

    values: dict[str, str] = {}
    for field_name, rule in FIELD_RULES.items():
        name, text = _resolve(properties, rule.candidates, rule.prefer_type, exclude=claimed)
        if name is not None:
            claimed.add(name)
        values[field_name] = text

    if not values["title"]:
        for name, value in properties.items():
            if name in claimed:
                continue
            text = extract_display_text(value)
            if text:
                LOGGER.debug("Page %s: no title candidate, using property '%s'", page_id, name)
                claimed.add(name)
                values["title"] = text
                break
        else:
            LOGGER.debug("Page %s: no usable title, available properties: %s", page_id, list(properties))
            values["title"] = _fallback_title(page_id)

    extra_fields = {
        name: extract_display_text(value)
        for name, value in properties.items()
        if name not in claimed and isinstance(name, str)
    }

    return NormalizedItem(
        id=page_id,
        title=values["title"],
        status=values["status"] or default_status or DEFAULT_STATUS,
        description=values["description"],
        due_date=values["due_date"],
        priority=values["priority"],
        images=images,
        extra_fields=extra_fields,
    )


def normalize_all(pages: Any, default_status: str = DEFAULT_STATUS) -> list[NormalizedItem]:
    if not isinstance(pages, list):
        return []
    return [normalize(page, default_status) for page in pages]
