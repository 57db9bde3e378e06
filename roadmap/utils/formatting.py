import html
from datetime import date, datetime


MONTHS_SHORT = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"
]


def parse_date(value: str | None) -> date | None:
    """Parse an ISO 8601 date or date-time string."""
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def format_date_long(d: date | str | None) -> str:
    """Format date as '15 Jan 2026'. Unparsable strings are returned as is."""
    if d is None or d == "":
        return ""
    if isinstance(d, str):
        parsed = parse_date(d)
        if parsed is None:
            return d
        d = parsed
    return f"{d.day} {MONTHS_SHORT[d.month - 1]} {d.year}"


def format_number(value: int | float) -> str:
    """Plain decimal representation: 3 -> '3', 3.0 -> '3', 2.5 -> '2.5'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def escape_html(text: str | None) -> str:
    """Escape HTML special characters, quotes included."""
    return html.escape(text) if text is not None else ""
