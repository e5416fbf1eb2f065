"""Web-facing observers for basket activity events.

Subscribes to the GLOBAL_EVENT_BUS and keeps a small in-memory ring buffer of
recent events that the web layer serves as an activity feed.

Design:
  * Each event gets an auto-increment id (cursor) so clients can poll with
    since=<last_id_seen> and receive only newer events.
  * A Lock guards the buffer; the buffer is per process.
  * MAX_EVENTS caps memory use.
"""
from __future__ import annotations
import logging
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS, SHOPPING_RECONCILED, SHOPPING_CLEARED, ARCHIVE_CREATED, RECIPE_UPDATED
)

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started = False

OBSERVED_EVENTS = (SHOPPING_RECONCILED, SHOPPING_CLEARED, ARCHIVE_CREATED, RECIPE_UPDATED)


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        }
        if isinstance(payload, dict):
            # scalars only; the record id goes to "ref" so the cursor stays intact
            for k, v in payload.items():
                key = "ref" if k == "id" else k
                if key not in evt and (isinstance(v, (str, int, float, bool)) or v is None):
                    evt[key] = v
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in OBSERVED_EVENTS:
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True
    logger.debug("Activity observers subscribed to %s", ", ".join(OBSERVED_EVENTS))


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive), plus the cursor for the next poll."""
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events', 'MAX_EVENTS']
