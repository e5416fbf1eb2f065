"""Read-only archive views: month overview and single entry detail."""
from __future__ import annotations
from collections import OrderedDict
from typing import Any, Dict, List

from basket.domain.ArchiveEntry import ArchiveEntry
from basket.domain.errors import NotFoundError
from basket.utilities.constants import (
    CURRENCY_SYMBOL, DISPLAY_DATE_FORMAT, MONTH_NAMES, MSG_ENTRY_NOT_FOUND, MSG_NO_ARCHIVE, UNKNOWN_MONTH_KEY,
    WEEKDAY_NAMES,
)

__all__ = ["format_money", "month_label", "group_by_month", "archive_list_view", "archive_detail_view", "find_entry"]


def format_money(value: float) -> str:
    return f"{value:.2f} {CURRENCY_SYMBOL}"


def month_label(key: str) -> str:
    """'2024-01' -> 'Januar 2024'."""
    if key == UNKNOWN_MONTH_KEY:
        return "Ohne Datum"
    year, month = key.split("-")
    return f"{MONTH_NAMES[int(month) - 1]} {year}"


def group_by_month(entries: List[ArchiveEntry]) -> List[Dict[str, Any]]:
    """Group entries by year-month of their date, newest month first.

    Entries keep their archive order inside a group; totals are plain sums.
    Entries without a readable date end up in a trailing group.
    """
    groups: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()
    for entry in entries:
        key = entry.month_key() or UNKNOWN_MONTH_KEY
        group = groups.setdefault(key, {"key": key, "month": month_label(key), "entries": [], "total": 0.0})
        group["entries"].append(entry)
        group["total"] += entry.amount

    dated = sorted((g for k, g in groups.items() if k != UNKNOWN_MONTH_KEY), key=lambda g: g["key"], reverse=True)
    if UNKNOWN_MONTH_KEY in groups:
        dated.append(groups[UNKNOWN_MONTH_KEY])
    return dated


def _short_date(entry: ArchiveEntry) -> str:
    d = entry.parsed_date()
    return d.strftime(DISPLAY_DATE_FORMAT) if d else str(entry.date)


def _long_date(entry: ArchiveEntry) -> str:
    d = entry.parsed_date()
    if d is None:
        return str(entry.date)
    return f"{WEEKDAY_NAMES[d.weekday()]}, {d.day}. {MONTH_NAMES[d.month - 1]} {d.year}"


def archive_list_view(entries: List[ArchiveEntry]) -> Dict[str, Any]:
    if not entries:
        title, text = MSG_NO_ARCHIVE
        return {"empty": True, "title": title, "text": text, "months": []}
    months = []
    for group in group_by_month(entries):
        months.append({
            "key": group["key"],
            "month": group["month"],
            "total": group["total"],
            "total_text": format_money(group["total"]),
            "entries": [
                {
                    "id": e.id,
                    "date": _short_date(e),
                    "store": e.store_name,
                    "amount": e.amount,
                    "amount_text": format_money(e.amount),
                    "has_receipt": bool(e.receipt_image),
                }
                for e in group["entries"]
            ],
        })
    return {"empty": False, "months": months}


def find_entry(entries: List[ArchiveEntry], entry_id: str) -> ArchiveEntry:
    for entry in entries:
        if entry.id == entry_id:
            return entry
    raise NotFoundError(MSG_ENTRY_NOT_FOUND)


def archive_detail_view(entries: List[ArchiveEntry], entry_id: str) -> Dict[str, Any]:
    entry = find_entry(entries, entry_id)
    return {
        "id": entry.id,
        "date": _long_date(entry),
        "iso_date": entry.date,
        "store": entry.store_name,
        "amount": entry.amount,
        "amount_text": format_money(entry.amount),
        "receipt_image": entry.receipt_image,
        "items": [
            {
                "marker": "✓" if item.checked else "○",
                "checked": item.checked,
                "name": item.name,
                "amount": item.amount_text(),
            }
            for item in entry.shopping_list
        ],
    }
