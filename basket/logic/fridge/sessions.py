"""In-memory store of active fridge checks, one per opened view.

A check lives from view entry until it is applied or navigated away from. The
web layer addresses it with an opaque token; the oldest checks are evicted once
MAX_VIEW_SESSIONS is reached.
"""
from __future__ import annotations
import logging
import uuid
from collections import OrderedDict
from threading import Lock
from typing import Optional

from basket.domain.errors import NotFoundError
from basket.logic.fridge.check import FridgeCheck
from basket.utilities.config import MAX_VIEW_SESSIONS

logger = logging.getLogger(__name__)


class FridgeCheckSessions:
    def __init__(self, max_sessions: int = MAX_VIEW_SESSIONS):
        self.max_sessions = max_sessions
        self._lock = Lock()
        self._checks: "OrderedDict[str, FridgeCheck]" = OrderedDict()

    def open(self, storage) -> tuple[str, FridgeCheck]:
        check = FridgeCheck.start(storage)
        token = uuid.uuid4().hex
        with self._lock:
            self._checks[token] = check
            while len(self._checks) > self.max_sessions:
                evicted, _ = self._checks.popitem(last=False)
                logger.debug("Evicted fridge check %s", evicted)
        return token, check

    def get(self, token: str) -> FridgeCheck:
        with self._lock:
            check = self._checks.get(token)
        if check is None:
            raise NotFoundError("Kühlschrank-Check nicht gefunden. Bitte neu starten.")
        return check

    def discard(self, token: str) -> Optional[FridgeCheck]:
        with self._lock:
            return self._checks.pop(token, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._checks)


# Shared by the web layer
FRIDGE_CHECKS = FridgeCheckSessions()
