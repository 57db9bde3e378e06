"""
HTML rendering for the roadmap pages.

Pages are plain HTML strings styled with Tailwind utility classes; every
value coming from Notion goes through escape_html.
"""

from urllib.parse import quote

from roadmap.services.normalizer import NormalizedItem
from roadmap.ui.view import RoadmapView, ViewState
from roadmap.utils.constants import EMPTY_VALUE, STATUS_STYLE_FALLBACK, STATUS_STYLES
from roadmap.utils.formatting import escape_html, format_date_long

PAGE_TITLE = "Project Roadmap"


def status_classes(status: str) -> str:
    """Badge classes for a status; unknown statuses get the neutral style."""
    bg, text, _ = STATUS_STYLES.get(status, STATUS_STYLE_FALLBACK)
    return f"{bg} {text}"


def _status_badge(status: str) -> str:
    return (
        f'<span class="px-3 py-1 text-sm rounded-full {status_classes(status)}">'
        f"{escape_html(status)}</span>"
    )


def _layout(title: str, body: str, description: str = "Project Roadmap powered by Notion") -> str:
    return "\n".join([
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="utf-8">',
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
        f"<title>{escape_html(title)}</title>",
        f'<meta name="description" content="{escape_html(description)}">',
        '<script src="https://cdn.tailwindcss.com"></script>',
        "</head>",
        '<body class="min-h-screen bg-gray-50 p-4 md:p-8">',
        body,
        "</body>",
        "</html>",
    ])


def _loading_block(text: str) -> str:
    return (
        '<div class="flex items-center space-x-2 text-gray-600 mb-6" data-state="loading">'
        '<div class="animate-spin rounded-full h-5 w-5 border-b-2 border-blue-500"></div>'
        f"<span>{escape_html(text)}</span></div>"
    )


def _error_block(heading: str, message: str | None) -> str:
    return (
        '<div class="bg-red-100 border-l-4 border-red-500 text-red-700 p-4 mb-6 rounded" data-state="error">'
        f'<p class="font-bold">{escape_html(heading)}</p>'
        f'<p class="mt-2">{escape_html(message or "")}</p>'
        "</div>"
    )


def _back_link() -> str:
    return '<a href="/" class="mb-6 inline-block text-sm text-gray-600 hover:text-gray-900">&larr; Back to all projects</a>'


def _item_card(item: NormalizedItem) -> str:
    href = f"/project/{quote(item.id, safe='')}"
    parts = [
        '<div class="bg-white p-6 rounded-lg shadow-md border-l-4 border-blue-500">',
        '<div class="flex justify-between items-start">',
        f'<h2 class="text-xl font-semibold text-gray-800"><a href="{escape_html(href)}">{escape_html(item.title)}</a></h2>',
        _status_badge(item.status),
        "</div>",
    ]
    if item.description:
        parts.append(f'<p class="mt-2 text-gray-600">{escape_html(item.description)}</p>')
    if item.due_date:
        parts.append(f'<p class="mt-3 text-sm text-gray-500">Due: {escape_html(format_date_long(item.due_date))}</p>')
    parts.append("</div>")
    return "\n".join(parts)


def render_list_page(view: RoadmapView) -> str:
    """Render the roadmap listing for the current view state."""
    parts = [
        '<div class="max-w-4xl mx-auto">',
        f'<h1 class="text-3xl font-bold text-gray-800 mb-8">{PAGE_TITLE}</h1>',
    ]

    if view.state is ViewState.LOADING:
        parts.append(_loading_block("Loading roadmap items..."))
    elif view.state is ViewState.ERROR:
        parts.append(_error_block("Error loading roadmap data", view.error))
    elif view.state is ViewState.EMPTY:
        parts.append('<p class="text-gray-500" data-state="empty">No roadmap items found.</p>')
    else:
        parts.append('<div class="space-y-6" data-state="ready">')
        parts.extend(_item_card(item) for item in view.items)
        parts.append("</div>")

    parts.append("</div>")
    return _layout(PAGE_TITLE, "\n".join(parts))


def _detail_fact(label: str, value: str) -> str:
    return (
        '<div class="flex items-start"><div>'
        f'<p class="text-xs font-medium text-gray-500">{escape_html(label)}</p>'
        f'<p class="text-sm text-gray-900">{escape_html(value)}</p>'
        "</div></div>"
    )


def _detail_body(item: NormalizedItem) -> str:
    parts = [
        '<div class="bg-white rounded-xl shadow-sm border border-gray-200 overflow-hidden" data-state="ready">',
        '<div class="p-6 md:p-8">',
        '<div class="flex flex-col md:flex-row md:items-start md:justify-between gap-6">',
        '<div class="flex-1">',
        f'<div class="flex items-center mb-4">{_status_badge(item.status)}</div>',
        f'<h1 class="text-2xl md:text-3xl font-bold text-gray-900 mb-3">{escape_html(item.title)}</h1>',
    ]
    if item.description:
        parts.append(f'<p class="text-gray-600 mb-6">{escape_html(item.description)}</p>')

    facts = []
    if item.due_date:
        facts.append(_detail_fact("Due Date", format_date_long(item.due_date)))
    if item.priority:
        facts.append(_detail_fact("Priority", item.priority))
    if facts:
        parts.append('<div class="grid grid-cols-1 sm:grid-cols-2 gap-4 mt-6">')
        parts.extend(facts)
        parts.append("</div>")
    parts.append("</div>")

    if item.images:
        parts.append(
            '<div class="md:w-1/3"><div class="bg-gray-100 rounded-lg overflow-hidden">'
            f'<img src="{escape_html(item.images[0])}" alt="{escape_html(item.title)}" class="w-full h-auto object-cover">'
            "</div></div>"
        )
    parts.append("</div>")

    if item.extra_fields:
        parts.append('<div class="mt-8 pt-6 border-t border-gray-200">')
        parts.append('<h3 class="text-lg font-medium text-gray-900 mb-4">Project Details</h3>')
        parts.append('<div class="grid grid-cols-1 sm:grid-cols-2 gap-4">')
        for name, value in item.extra_fields.items():
            parts.append(
                '<div class="bg-gray-50 p-4 rounded-lg">'
                f'<p class="text-xs font-medium text-gray-500 uppercase tracking-wider">{escape_html(name)}</p>'
                f'<p class="mt-1 text-sm text-gray-900 break-words">{escape_html(value or EMPTY_VALUE)}</p>'
                "</div>"
            )
        parts.append("</div></div>")

    parts.append("</div></div>")
    return "\n".join(parts)


def render_detail_page(view: RoadmapView) -> str:
    """Render the detail page of a single roadmap item."""
    parts = ['<div class="max-w-4xl mx-auto">', _back_link()]
    title = "Project Details"

    if view.state is ViewState.LOADING:
        parts.append(_loading_block("Loading project details..."))
    elif view.state is ViewState.ERROR:
        parts.append(_error_block("Error Loading Project", view.error))
    elif view.item is None:
        parts.append(
            '<div class="text-center" data-state="empty">'
            '<h2 class="text-xl font-semibold text-gray-900 mb-2">Project Not Found</h2>'
            '<p class="text-gray-600 mb-6">The requested project could not be found.</p>'
            "</div>"
        )
    else:
        title = f"{view.item.title} - Project Details"
        parts.append(_detail_body(view.item))

    parts.append("</div>")
    description = f"Details for {view.item.title}" if view.item else "Project details"
    return _layout(title, "\n".join(parts), description=description)
