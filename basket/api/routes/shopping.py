from typing import List, Union

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from basket.api.deps import get_storage
from basket.domain.ShoppingList import ShoppingItem, ShoppingList
from basket.domain.errors import PersistenceError, ValidationError
from basket.infra.storage import Storage
from basket.utilities.constants import MSG_SAVE_FAILED
from basket.utilities.validators import validate_amount

router = APIRouter(prefix="/api/shopping-list", tags=["shopping"])


class ShoppingItemInput(BaseModel):
    """Schema for one shopping list item; unknown keys are kept."""
    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1, max_length=100)
    amount: Union[int, float, str] = 0
    unit: str = Field("", max_length=20)
    checked: bool = False


class ShoppingListInput(BaseModel):
    model_config = ConfigDict(extra="allow")

    items: List[ShoppingItemInput] = Field(default_factory=list)


def _payload(shopping_list):
    if shopping_list is None:
        return {"list": None, "count": 0}
    return {"list": shopping_list.to_dict(), "count": len(shopping_list)}


@router.get("")
def get_shopping_list(storage: Storage = Depends(get_storage)):
    return _payload(storage.load_shopping_list())


@router.put("")
def put_shopping_list(payload: ShoppingListInput, storage: Storage = Depends(get_storage)):
    data = payload.model_dump()
    items = [ShoppingItem.from_dict(i) for i in data.pop("items")]
    for item in items:
        # numbers must stay reducible: finite, non-negative, in range
        if isinstance(item.amount, (int, float)) and not isinstance(item.amount, bool):
            check = validate_amount(item.amount)
            if not check.valid:
                raise ValidationError(f"{item.name}: {check.error}")
    shopping_list = ShoppingList(items, data)
    result = storage.save_shopping_list(shopping_list)
    if not result.success:
        raise PersistenceError(MSG_SAVE_FAILED + (result.error or ""))
    return _payload(shopping_list)


@router.delete("")
def delete_shopping_list(storage: Storage = Depends(get_storage)):
    result = storage.clear_shopping_list()
    if not result.success:
        raise PersistenceError(MSG_SAVE_FAILED + (result.error or ""))
    return {"cleared": True}
