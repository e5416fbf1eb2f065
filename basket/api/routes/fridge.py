from typing import Any, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from basket.api.deps import get_fridge_checks, get_storage
from basket.infra.storage import Storage
from basket.logic.fridge.sessions import FridgeCheckSessions

router = APIRouter(prefix="/api/fridge-check", tags=["fridge"])


class ToggleRequest(BaseModel):
    index: int


class AmountRequest(BaseModel):
    index: int
    value: Any = None


class ApplyRequest(BaseModel):
    confirm: bool = False


@router.post("")
def open_fridge_check(storage: Storage = Depends(get_storage),
                      checks: FridgeCheckSessions = Depends(get_fridge_checks)):
    """Enter the fridge check view: snapshot the list, empty selection."""
    token, check = checks.open(storage)
    return {"token": token, "view": check.view()}


@router.get("/{token}")
def get_fridge_check(token: str, checks: FridgeCheckSessions = Depends(get_fridge_checks)):
    return {"token": token, "view": checks.get(token).view()}


@router.post("/{token}/toggle")
def toggle_item(token: str, payload: ToggleRequest, checks: FridgeCheckSessions = Depends(get_fridge_checks)):
    check = checks.get(token)
    selected = check.toggle(payload.index)
    return {"selected": selected, "view": check.view()}


@router.post("/{token}/amount")
def set_amount(token: str, payload: AmountRequest, checks: FridgeCheckSessions = Depends(get_fridge_checks)):
    check = checks.get(token)
    accepted = check.set_have_amount(payload.index, payload.value)
    return {"accepted": accepted, "view": check.view()}


@router.post("/{token}/apply")
def apply_check(token: str, payload: Optional[ApplyRequest] = None,
                checks: FridgeCheckSessions = Depends(get_fridge_checks)):
    check = checks.get(token)
    outcome = check.apply(confirm_empty=bool(payload and payload.confirm))
    if outcome.status in ("applied", "skipped", "no_list"):
        checks.discard(token)
    return outcome.to_dict()


@router.delete("/{token}")
def leave_fridge_check(token: str, checks: FridgeCheckSessions = Depends(get_fridge_checks)):
    """Navigating away discards the selection."""
    return {"discarded": checks.discard(token) is not None}
