import pytest

from basket.domain.ArchiveEntry import ArchiveEntry
from basket.domain.ShoppingList import ShoppingItem
from basket.domain.errors import NotFoundError
from basket.logic.archive.browse import (
    archive_detail_view, archive_list_view, format_money, group_by_month, month_label,
)
from basket.utilities.constants import MSG_NO_ARCHIVE


@pytest.fixture
def entries():
    return [
        ArchiveEntry("a", "Rewe", 10.0, "2024-01-05",
                     shopping_list=[ShoppingItem("Milch", 2, "L", True), ShoppingItem("Salz", "etwas", "")]),
        ArchiveEntry("b", "Aldi", 20.5, "2024-01-20"),
        ArchiveEntry("c", "Edeka", 5.0, "2024-02-01"),
        ArchiveEntry("d", "Markt", 1.0, "irgendwann"),
    ]


def test_format_and_labels():
    assert format_money(12.5) == "12.50 €"
    assert month_label("2024-03") == "März 2024"
    assert month_label("unbekannt") == "Ohne Datum"


def test_group_by_month(entries):
    groups = group_by_month(entries)
    assert [g["key"] for g in groups] == ["2024-02", "2024-01", "unbekannt"]
    january = groups[1]
    assert [e.id for e in january["entries"]] == ["a", "b"]
    assert january["total"] == 30.5
    assert january["month"] == "Januar 2024"


def test_list_view(entries):
    view = archive_list_view(entries)
    assert view["empty"] is False
    january = view["months"][1]
    assert january["total_text"] == "30.50 €"
    assert january["entries"][0]["date"] == "05.01.2024"
    assert january["entries"][0]["amount_text"] == "10.00 €"
    assert view["months"][2]["entries"][0]["date"] == "irgendwann"


def test_empty_archive():
    view = archive_list_view([])
    assert view["empty"] is True
    assert (view["title"], view["text"]) == MSG_NO_ARCHIVE


def test_detail_view(entries):
    view = archive_detail_view(entries, "a")
    assert view["date"] == "Freitag, 5. Januar 2024"
    assert view["store"] == "Rewe"
    assert view["amount_text"] == "10.00 €"
    assert view["items"] == [
        {"marker": "✓", "checked": True, "name": "Milch", "amount": "2 L"},
        {"marker": "○", "checked": False, "name": "Salz", "amount": "etwas"},
    ]


def test_detail_unknown_id(entries):
    with pytest.raises(NotFoundError):
        archive_detail_view(entries, "zzz")


def test_groups_follow_month_not_insertion_order():
    entries = [
        ArchiveEntry("m", "Rewe", 2.0, "2024-03-10"),
        ArchiveEntry("j", "Aldi", 1.0, "2024-01-15"),
        ArchiveEntry("x", "Markt", 9.0, "ohne"),
        ArchiveEntry("f", "Edeka", 4.0, "2024-02-02"),
        ArchiveEntry("d", "Lidl", 8.0, "2023-12-24"),
        ArchiveEntry("m2", "Rewe", 3.0, "2024-03-01"),
    ]
    groups = group_by_month(entries)
    assert [g["key"] for g in groups] == ["2024-03", "2024-02", "2024-01", "2023-12", "unbekannt"]
    # inside a month the archive order is kept
    assert [e.id for e in groups[0]["entries"]] == ["m", "m2"]
    assert groups[0]["total"] == 5.0
