"""Archive a finished shopping trip.

Moves the current shopping list into an immutable archive entry together with
store, amount, date and an optional receipt photo, then clears the list.
"""
from __future__ import annotations
import logging
import uuid
from datetime import date
from typing import Any, Dict, List, Optional

from basket.domain.ArchiveEntry import ArchiveEntry
from basket.domain.ShoppingList import ShoppingItem, ShoppingList
from basket.domain.errors import PersistenceError, ValidationError
from basket.events.Event_Bus import ARCHIVE_CREATED, SHOPPING_CLEARED, publish
from basket.logic.navigation import navigate_to
from basket.utilities.constants import (
    MSG_ARCHIVE_FAILED, MSG_ARCHIVED, MSG_CLEAR_FAILED, MSG_NO_SHOPPING_LIST,
)
from basket.utilities.sanitizer import load_embedded_image
from basket.utilities.validators import validate_amount, validate_date, validate_store_name

logger = logging.getLogger(__name__)


def generate_id(existing: List[str]) -> str:
    """Fresh id that is not used by any existing entry."""
    taken = set(existing)
    while True:
        candidate = uuid.uuid4().hex
        if candidate not in taken:
            return candidate


class ArchiveCreator:
    def __init__(self, storage, shopping_list: Optional[ShoppingList] = None):
        self.storage = storage
        self.shopping_list = shopping_list
        self.receipt_image: Optional[str] = None

    @classmethod
    def start(cls, storage) -> "ArchiveCreator":
        return cls(storage, storage.load_shopping_list())

    def view(self) -> Dict[str, Any]:
        if self.shopping_list is None:
            title, text = MSG_NO_SHOPPING_LIST
            return {"empty": True, "title": title, "text": text}
        return {
            "empty": False,
            "default_date": date.today().isoformat(),
            "item_count": len(self.shopping_list),
            "receipt_image": self.receipt_image,
        }

    def select_receipt(self, filename: Optional[str], content_type: Optional[str], data: bytes) -> str:
        '''Validate and keep a receipt photo; a rejected file leaves no receipt selected.'''
        try:
            self.receipt_image = load_embedded_image(filename, content_type, data)
        except ValidationError:
            self.receipt_image = None
            raise
        return self.receipt_image

    def build_entry(self, store_name: Any, amount: Any, entry_date: Any, existing_ids: List[str]) -> ArchiveEntry:
        store = validate_store_name(store_name)
        if not store.valid:
            raise ValidationError(store.error)
        money = validate_amount(amount)
        if not money.valid:
            raise ValidationError(money.error)
        day = validate_date(entry_date)
        if not day.valid:
            raise ValidationError(day.error)

        current = self.storage.load_shopping_list()
        if current is None:
            current = self.shopping_list if self.shopping_list is not None else ShoppingList()
        return ArchiveEntry(
            id=generate_id(existing_ids),
            store_name=store.value,
            amount=round(float(money.value), 2),
            date=day.value,
            receipt_image=self.receipt_image,
            shopping_list=[ShoppingItem.from_dict(i) for i in current.snapshot_items()],
        )

    def submit(self, store_name: Any, amount: Any, entry_date: Any) -> Dict[str, Any]:
        '''Archive the trip and clear the shopping list, or change nothing.'''
        if self.shopping_list is None:
            self.shopping_list = self.storage.load_shopping_list()
            if self.shopping_list is None:
                raise ValidationError(MSG_NO_SHOPPING_LIST[1])

        previous = self.storage.load_archive()
        entry = self.build_entry(store_name, amount, entry_date, [e.id for e in previous])

        result = self.storage.save_archive(previous + [entry])
        if not result.success:
            raise PersistenceError(MSG_ARCHIVE_FAILED + (result.error or ""))

        cleared = self.storage.clear_shopping_list()
        if not cleared.success:
            # undo the archive write so list and archive stay consistent
            restored = self.storage.save_archive(previous)
            if not restored.success:
                logger.error("Could not restore archive after failed clear: %s", restored.error)
            raise PersistenceError(MSG_CLEAR_FAILED + (cleared.error or ""))

        logger.info("Archived shopping trip %s (%s, %.2f, %s items)",
                    entry.id, entry.store_name, entry.amount, len(entry.shopping_list))
        publish(ARCHIVE_CREATED, {
            "id": entry.id, "storeName": entry.store_name, "amount": entry.amount,
            "date": entry.date, "items": len(entry.shopping_list),
        })
        publish(SHOPPING_CLEARED, {"reason": "archived"})
        self.shopping_list = None
        self.receipt_image = None
        return {"entry": entry, "message": MSG_ARCHIVED, "navigate": navigate_to("archive")}
