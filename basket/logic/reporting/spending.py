"""Spending statistics over archived shopping trips."""
from collections import Counter, defaultdict
from typing import Any, Dict, List, Tuple

from basket.domain.ArchiveEntry import ArchiveEntry


class SpendingStats:
    """Insights into archived shopping trips."""

    def __init__(self, entries: List[ArchiveEntry]):
        self.entries = list(entries)

    def total(self) -> float:
        return round(sum(e.amount for e in self.entries), 2)

    def average_per_trip(self) -> float:
        if not self.entries:
            return 0.0
        return round(self.total() / len(self.entries), 2)

    def totals_by_store(self) -> List[Tuple[str, float]]:
        """Store totals, biggest first."""
        totals: Dict[str, float] = defaultdict(float)
        for entry in self.entries:
            totals[entry.store_name] += entry.amount
        return sorted(((store, round(t, 2)) for store, t in totals.items()), key=lambda x: (-x[1], x[0]))

    def most_bought_items(self, limit: int = 10) -> List[Tuple[str, int]]:
        """Item names that appear in the most archived lists (case-insensitive)."""
        counter: Counter = Counter()
        display: Dict[str, str] = {}
        for entry in self.entries:
            seen = set()
            for item in entry.shopping_list:
                key = (item.name or '').strip().lower()
                if not key or key in seen:
                    continue
                seen.add(key)
                display.setdefault(key, item.name.strip())
                counter[key] += 1
        return [(display[k], n) for k, n in counter.most_common(limit)]

    def summary(self) -> Dict[str, Any]:
        return {
            'trips': len(self.entries),
            'total': self.total(),
            'average_per_trip': self.average_per_trip(),
            'by_store': [{'store': s, 'total': t} for s, t in self.totals_by_store()],
            'most_bought': [{'name': n, 'count': c} for n, c in self.most_bought_items()],
        }
