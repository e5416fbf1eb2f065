"""Fridge check: subtract what is already at home from the shopping list.

The user selects items of the list they already have and, for numeric amounts,
how much. Applying the check drops fully covered items and shrinks partially
covered ones; nothing is ever added.

Selection positions refer to the snapshot of the list taken when the check was
started. If the stored list no longer matches that snapshot at apply time the
check is rejected instead of applying amounts to the wrong items.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from basket.domain.ShoppingList import Amount, ShoppingItem, ShoppingList, is_numeric
from basket.domain.errors import NotFoundError, PersistenceError, StaleSelectionError
from basket.events.Event_Bus import SHOPPING_RECONCILED, publish
from basket.logic.navigation import ViewState, navigate_to
from basket.utilities.constants import (
    MSG_CHECK_DONE, MSG_CONFIRM_EMPTY_CHECK, MSG_NO_SHOPPING_LIST, MSG_SAVE_FAILED, MSG_STALE_SELECTION,
)
from basket.utilities.validators import parse_number

logger = logging.getLogger(__name__)

__all__ = ["round_half_up", "reconcile", "ApplyOutcome", "FridgeCheck"]


def round_half_up(value: float) -> float:
    """Round to two decimals, halves rounded up on the scaled value."""
    return math.floor(value * 100 + 0.5) / 100


def reconcile(items: List[ShoppingItem], selection: Dict[int, Amount]) -> Tuple[List[ShoppingItem], int, int]:
    """Apply have-amounts to the items.

    Args:
        items: list items in display order.
        selection: position -> amount the user already has.

    Returns:
        (remaining items in original order, removed count, reduced count).
    """
    kept: List[ShoppingItem] = []
    removed = 0
    reduced = 0
    for index, item in enumerate(items):
        if index not in selection:
            kept.append(item)
            continue
        have = selection[index]
        if is_numeric(item.amount) and is_numeric(have):
            remaining = item.amount - have
            if remaining <= 0:
                removed += 1
            else:
                kept.append(ShoppingItem(item.name, round_half_up(remaining), item.unit, item.checked, item.extra))
                reduced += 1
        else:
            # text amounts cannot be subtracted: a selected item counts as bought
            removed += 1
    return kept, removed, reduced


@dataclass
class ApplyOutcome:
    status: str  # applied | skipped | needs_confirmation | no_list
    removed: int = 0
    reduced: int = 0
    message: str = ""
    navigate: Optional[ViewState] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "removed": self.removed,
            "reduced": self.reduced,
            "message": self.message,
            "navigate": self.navigate.to_dict() if self.navigate else None,
        }


def _signature(items: List[ShoppingItem]) -> List[Tuple[Any, Any, Any]]:
    return [(i.name, i.amount, i.unit) for i in items]


class FridgeCheck:
    def __init__(self, storage, shopping_list: Optional[ShoppingList]):
        self.storage = storage
        items = shopping_list.items if shopping_list else []
        self._snapshot: Tuple[ShoppingItem, ...] = tuple(ShoppingItem.from_dict(i.to_dict()) for i in items)
        self.selection: Dict[int, Amount] = {}

    @classmethod
    def start(cls, storage) -> "FridgeCheck":
        '''Enter the view: load the list once and start with an empty selection.'''
        return cls(storage, storage.load_shopping_list())

    @property
    def items(self) -> Tuple[ShoppingItem, ...]:
        return self._snapshot

    def is_empty(self) -> bool:
        return not self._snapshot

    def _item(self, index: int) -> ShoppingItem:
        if not isinstance(index, int) or not 0 <= index < len(self._snapshot):
            raise NotFoundError(f"Kein Artikel an Position {index}")
        return self._snapshot[index]

    def toggle(self, index: int) -> bool:
        '''Select or deselect an item. Returns the new selected state.'''
        item = self._item(index)
        if index in self.selection:
            del self.selection[index]
            return False
        self.selection[index] = item.amount
        return True

    def set_have_amount(self, index: int, value: Any) -> bool:
        '''Set how much of a selected numeric item is at home. Invalid input is ignored.'''
        item = self._item(index)
        if index not in self.selection or not item.numeric:
            return False
        number = parse_number(value)
        if number is None or number < 0:
            return False
        self.selection[index] = int(number) if number.is_integer() else number
        return True

    def view(self) -> Dict[str, Any]:
        '''View description of the current state.'''
        if self.is_empty():
            title, text = MSG_NO_SHOPPING_LIST
            return {"empty": True, "title": title, "text": text, "items": []}
        rows = []
        for index, item in enumerate(self._snapshot):
            selected = index in self.selection
            rows.append({
                "index": index,
                "name": item.name,
                "unit": item.unit,
                "needed": f"Benötigt: {item.amount_text()}",
                "selected": selected,
                "have": self.selection.get(index),
                "editable": selected and item.numeric,
                "max": item.amount * 2 if item.numeric else None,
            })
        return {"empty": False, "items": rows, "selected_count": len(self.selection)}

    def apply(self, confirm_empty: bool = False) -> ApplyOutcome:
        '''Write the reconciled list back to storage.'''
        shopping_list = self.storage.load_shopping_list()
        if shopping_list is None:
            return ApplyOutcome("no_list")

        if not self.selection:
            if not confirm_empty:
                return ApplyOutcome("needs_confirmation", message=MSG_CONFIRM_EMPTY_CHECK)
            return ApplyOutcome("skipped", navigate=navigate_to("shopping"))

        if _signature(shopping_list.items) != _signature(list(self._snapshot)):
            logger.warning("Fridge check rejected: shopping list changed since the check started")
            raise StaleSelectionError(MSG_STALE_SELECTION)

        kept, removed, reduced = reconcile(shopping_list.items, self.selection)
        result = self.storage.save_shopping_list(shopping_list.replace_items(kept))
        if not result.success:
            raise PersistenceError(MSG_SAVE_FAILED + (result.error or ""))

        logger.info("Fridge check applied: removed=%s reduced=%s remaining=%s", removed, reduced, len(kept))
        publish(SHOPPING_RECONCILED, {"removed": removed, "reduced": reduced, "remaining": len(kept)})
        self.selection = {}

        message = MSG_CHECK_DONE
        if removed > 0:
            message += f"\n{removed} Artikel entfernt."
        if reduced > 0:
            message += f"\n{reduced} Artikel reduziert."
        return ApplyOutcome("applied", removed, reduced, message, navigate_to("shopping"))
