from datetime import date

from roadmap.utils.formatting import escape_html, format_date_long, format_number, parse_date


def test_parse_date_accepts_dates_and_datetimes() -> None:
    assert parse_date("2026-01-15") == date(2026, 1, 15)
    assert parse_date("2026-01-15T23:30:00.000Z") == date(2026, 1, 15)
    assert parse_date("soon") is None
    assert parse_date("") is None


def test_format_date_long() -> None:
    assert format_date_long("2026-01-15") == "15 Jan 2026"
    assert format_date_long(date(2025, 12, 1)) == "1 Dec 2025"
    assert format_date_long("next sprint") == "next sprint"
    assert format_date_long(None) == ""


def test_format_number() -> None:
    assert format_number(3) == "3"
    assert format_number(3.0) == "3"
    assert format_number(0.25) == "0.25"


def test_escape_html() -> None:
    assert escape_html('<a href="x">&</a>') == "&lt;a href=&quot;x&quot;&gt;&amp;&lt;/a&gt;"
    assert escape_html("it's") == "it&#x27;s"
    assert escape_html(None) == ""
