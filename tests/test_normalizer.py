from roadmap.services.normalizer import (
    FIELD_RULES,
    FieldCandidate,
    PropertyType,
    collect_image_urls,
    normalize,
    normalize_all,
    resolve_field,
)
from roadmap.utils.constants import DEFAULT_STATUS
from tests import fakes


def test_scenario_name_and_status() -> None:
    item = normalize(fakes.page({
        "Name": fakes.title("Ship v1"),
        "Status": fakes.select("In Progress"),
    }))

    assert item.title == "Ship v1"
    assert item.status == "In Progress"
    assert item.description == ""
    assert item.due_date == ""
    assert item.images == []
    assert item.to_dict()["dueDate"] == ""


def test_scenario_screenshot_files() -> None:
    item = normalize(fakes.page({
        "Name": fakes.title("Dashboard"),
        "Screenshot": {"type": "files", "files": [{"file": {"url": "https://x/img.png"}}]},
    }))
    assert item.images == ["https://x/img.png"]
    assert "Screenshot" not in item.extra_fields


def test_missing_title_uses_id_prefix() -> None:
    item = normalize(fakes.page({"Notes": fakes.rich_text(), "Stage": fakes.select(None)}, page_id="9f8e7d6c-1111"))
    assert item.title == "Item 9f8e7d"


def test_missing_title_and_id_is_untitled() -> None:
    assert normalize({"properties": {}}).title == "Untitled"


def test_missing_status_uses_default() -> None:
    item = normalize(fakes.page({"Name": fakes.title("A")}))
    assert item.status == DEFAULT_STATUS == "Not Started"


def test_default_status_is_configurable() -> None:
    item = normalize(fakes.page({"Name": fakes.title("A")}), default_status="Planned")
    assert item.status == "Planned"


def test_resolve_field_is_case_insensitive() -> None:
    page = fakes.page({"STATUS": fakes.select("Done")})
    assert resolve_field(page, ["Status"]) == "Done"
    assert normalize(page).status == "Done"


def test_resolve_field_skips_empty_candidates() -> None:
    page = fakes.page({"Name": fakes.title(), "Feature": fakes.rich_text("Dark mode")})
    assert resolve_field(page, ["Name", "Feature"]) == "Dark mode"


def test_resolve_field_prefers_type_over_names() -> None:
    page = fakes.page({"Name": fakes.rich_text("by name"), "Roadmap item": fakes.title("by type")})
    assert resolve_field(page, ["Name"], prefer_type=PropertyType.TITLE) == "by type"
    assert resolve_field(page, ["Name"]) == "by name"


def test_resolve_field_expected_type_filters_candidates() -> None:
    page = fakes.page({"Date": fakes.rich_text("soon"), "Deadline": fakes.date("2026-02-01")})
    candidates = [FieldCandidate("Date", PropertyType.DATE), FieldCandidate("Deadline", PropertyType.DATE)]
    assert resolve_field(page, candidates) == "2026-02-01"


def test_resolve_field_returns_empty_when_nothing_matches() -> None:
    assert resolve_field(fakes.page({"Other": fakes.select("x")}), ["Status"]) == ""
    assert resolve_field(None, ["Status"]) == ""


def test_title_candidate_order() -> None:
    names = [c.name for c in FIELD_RULES["title"].candidates]
    assert names == ["Name", "Title", "Feature", "Project", "Task", "Item", "Description"]

    item = normalize(fakes.page({
        "Project": fakes.rich_text("Platform"),
        "Feature": fakes.rich_text("Search"),
    }))
    assert item.title == "Search"
    assert item.extra_fields == {"Project": "Platform"}


def test_native_status_property_wins() -> None:
    item = normalize(fakes.page({
        "Name": fakes.title("A"),
        "Status": fakes.select("Legacy"),
        "Progress": fakes.status("In Review"),
    }))
    assert item.status == "In Review"
    assert item.extra_fields["Status"] == "Legacy"


def test_full_item_and_extra_fields() -> None:
    item = normalize(fakes.page({
        "Name": fakes.title("Billing"),
        "status": fakes.select("Done"),
        "description": fakes.rich_text("Invoices", "v2"),
        "Due Date": fakes.date("2026-04-30"),
        "priority": fakes.select("High"),
        "Tags": fakes.multi_select("backend", "payments"),
        "Estimate": fakes.number(5),
        "Public": fakes.checkbox(True),
        "Cover Image": fakes.url("https://cdn/cover.jpg"),
        "Owner": fakes.people(),
    }))

    assert item.to_dict() == {
        "id": fakes.DEFAULT_PAGE_ID,
        "title": "Billing",
        "status": "Done",
        "description": "Invoices v2",
        "dueDate": "2026-04-30",
        "priority": "High",
        "images": ["https://cdn/cover.jpg"],
        "extraFields": {
            "Tags": "backend, payments",
            "Estimate": "5",
            "Public": "Yes",
            "Owner": "",
        },
    }


def test_property_promoted_once() -> None:
    # "Description" is a title candidate too; it must not also fill description
    item = normalize(fakes.page({"Description": fakes.rich_text("Only text")}))
    assert item.title == "Only text"
    assert item.description == ""
    assert item.extra_fields == {}


def test_last_resort_title_scan() -> None:
    item = normalize(fakes.page({
        "Status": fakes.select("Done"),
        "Owner": fakes.people(),
        "Team": fakes.select("Core"),
    }))
    assert item.title == "Core"
    assert item.status == "Done"
    assert "Team" not in item.extra_fields


def test_collect_image_urls_order_and_flattening() -> None:
    page = fakes.page({
        "Thumbnail": fakes.url("https://x/1.png"),
        "Name": fakes.title("A"),
        "Screenshots": fakes.files(
            fakes.hosted_file("https://x/2.png"),
            fakes.external_file("https://x/3.png"),
        ),
        "snapshot": ["https://x/4.png", "https://x/4.png"],
        "Imagery notes": fakes.rich_text("https://x/5.png"),
    })

    assert collect_image_urls(page) == [
        "https://x/1.png",
        "https://x/2.png",
        "https://x/3.png",
        "https://x/4.png",
        "https://x/4.png",
        "https://x/5.png",
    ]


def test_collect_image_urls_matches_name_not_type() -> None:
    page = fakes.page({"Attachments": fakes.files(fakes.hosted_file("https://x/doc.pdf"))})
    assert collect_image_urls(page) == []


def test_normalize_never_raises_on_garbage() -> None:
    for garbage in (None, "page", 12, [], {"id": 5, "properties": "x"}, {"properties": {"Name": None}}):
        item = normalize(garbage)
        assert item.title
        assert item.status == DEFAULT_STATUS


def test_normalize_all() -> None:
    items = normalize_all([fakes.page({"Name": fakes.title("A")}), fakes.page({"Name": fakes.title("B")})])
    assert [i.title for i in items] == ["A", "B"]
    assert normalize_all(None) == []
