"""ShoppingList aggregate: ordered items to purchase plus any list metadata."""
import math
from typing import Any, Dict, List, Optional, Union

Amount = Union[int, float, str]


def is_numeric(value: Any) -> bool:
    """Numeric amounts are reducible; booleans, free text and inf/nan are not."""
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def format_amount(value: Union[int, float]) -> str:
    """Plain decimal without trailing zeros: 1234567 -> "1234567", 1.50 -> "1.5"."""
    return f"{value:f}".rstrip("0").rstrip(".")


class ShoppingItem:
    _FIELDS = ("name", "amount", "unit", "checked")

    def __init__(self, name: str = "", amount: Amount = 0, unit: str = "", checked: bool = False,
                 extra: Optional[Dict[str, Any]] = None):
        self.name = name
        self.amount = amount
        self.unit = unit
        self.checked = checked
        # keys we do not model (recipe references, categories...) survive a round trip
        self.extra = dict(extra) if extra else {}

    @property
    def numeric(self) -> bool:
        return is_numeric(self.amount)

    def amount_text(self) -> str:
        '''Amount for display: "1.5 L" for numeric amounts, the raw text otherwise.'''
        if self.numeric:
            return f"{format_amount(self.amount)} {self.unit}".strip()
        return str(self.amount)

    def snapshot(self) -> Dict[str, Any]:
        '''Value copy with the four archived fields only.'''
        return {"name": self.name, "amount": self.amount, "unit": self.unit, "checked": self.checked}

    def __eq__(self, other) -> bool:
        if not isinstance(other, ShoppingItem):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        mark = "x" if self.checked else " "
        return f"[{mark}] {self.name} - {self.amount_text()}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        extra = {k: v for k, v in d.items() if k not in ShoppingItem._FIELDS}
        return ShoppingItem(
            name=d.get("name", "") or "",
            amount=d.get("amount", 0),
            unit=d.get("unit", "") or "",
            checked=bool(d.get("checked", False)),
            extra=extra,
        )

    def to_dict(self):
        data = dict(self.extra)
        data.update(self.snapshot())
        return data


class ShoppingList:
    def __init__(self, items: Optional[List[ShoppingItem]] = None, meta: Optional[Dict[str, Any]] = None):
        self.items: List[ShoppingItem] = items[:] if items else []
        self.meta = dict(meta) if meta else {}

    def is_empty(self) -> bool:
        return not self.items

    def replace_items(self, items: List[ShoppingItem]) -> "ShoppingList":
        '''Return a list with new items and the same metadata.'''
        return ShoppingList(items, self.meta)

    def snapshot_items(self) -> List[Dict[str, Any]]:
        return [item.snapshot() for item in self.items]

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self.items)
        return f"Shopping List Items:\n\t{items_str}"

    def __repr__(self) -> str:
        return self.__str__()

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        raw_items = d.pop("items", None) or []
        return ShoppingList([ShoppingItem.from_dict(i) for i in raw_items], d)

    def to_dict(self):
        data = dict(self.meta)
        data["items"] = [item.to_dict() for item in self.items]
        return data
