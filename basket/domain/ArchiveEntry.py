"""ArchiveEntry domain entity: one completed shopping trip with its list snapshot."""
from datetime import date
from typing import Any, Dict, List, Optional

from basket.domain.ShoppingList import ShoppingItem


class ArchiveEntry:
    def __init__(self, id: str, store_name: str, amount: float, date: str,
                 receipt_image: Optional[str] = None, shopping_list: Optional[List[ShoppingItem]] = None):
        self.id = id
        self.store_name = store_name
        self.amount = amount
        self.date = date
        self.receipt_image = receipt_image
        # copies, never the live shopping list items
        self.shopping_list = [ShoppingItem.from_dict(i.snapshot()) for i in (shopping_list or [])]

    def parsed_date(self) -> Optional[date]:
        try:
            return date.fromisoformat(str(self.date)[:10])
        except ValueError:
            return None

    def month_key(self) -> Optional[str]:
        d = self.parsed_date()
        return f"{d.year}-{d.month:02d}" if d else None

    def __str__(self) -> str:
        return f"{self.date} - {self.store_name} - {self.amount:.2f} ({len(self.shopping_list)} items)"

    __repr__ = __str__

    @staticmethod
    def from_dict(data: Dict[str, Any]):
        d = dict(data) if isinstance(data, dict) else {}
        amount = d.get("amount", 0)
        try:
            amount = float(amount)
        except (TypeError, ValueError):
            amount = 0.0
        return ArchiveEntry(
            id=str(d.get("id", "")),
            store_name=d.get("storeName", "") or "",
            amount=amount,
            date=d.get("date", "") or "",
            receipt_image=d.get("receiptImage") or None,
            shopping_list=[ShoppingItem.from_dict(i) for i in d.get("shoppingList") or []],
        )

    def to_dict(self):
        return {
            "id": self.id,
            "storeName": self.store_name,
            "amount": self.amount,
            "date": self.date,
            "receiptImage": self.receipt_image,
            "shoppingList": [item.snapshot() for item in self.shopping_list],
        }
