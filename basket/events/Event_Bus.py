"""Simple Event Bus / Observer implementation for basket activity.

Event names:
  shopping.reconciled -> payload {"removed": int, "reduced": int, "remaining": int}
  shopping.cleared    -> payload {"reason": str}
  archive.created     -> payload {"id": str, "storeName": str, "amount": float, "date": str, "items": int}
  recipe.updated      -> payload {"id": str, "name": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
SHOPPING_RECONCILED = "shopping.reconciled"
SHOPPING_CLEARED = "shopping.cleared"
ARCHIVE_CREATED = "archive.created"
RECIPE_UPDATED = "recipe.updated"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any = None):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


def publish(event_name: str, payload: Any = None) -> None:
	"""Publish an event on the global bus."""
	GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'publish',
	'SHOPPING_RECONCILED', 'SHOPPING_CLEARED', 'ARCHIVE_CREATED', 'RECIPE_UPDATED'
]
