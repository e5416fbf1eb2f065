from typing import Optional

from fastapi import APIRouter, Depends, Query

from basket.api.deps import get_storage
from basket.events.web_observers import get_events
from basket.infra.storage import Storage

router = APIRouter(prefix="/api", tags=["activity"])


@router.get("/events")
def api_events(since: Optional[int] = Query(default=None)):
    """Recent activity; poll with since=<next_cursor> for newer events only."""
    return get_events(since)


@router.get("/backups")
def api_backups(record: Optional[str] = Query(default=None),
                storage: Storage = Depends(get_storage)):
    filename = f"{record}.json" if record else None
    return {"backups": storage.backups.list_backups(filename)}
