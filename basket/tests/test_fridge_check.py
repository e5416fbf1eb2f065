import pytest

from basket.domain.ShoppingList import ShoppingItem, ShoppingList
from basket.domain.errors import NotFoundError, PersistenceError, StaleSelectionError
from basket.events.Event_Bus import GLOBAL_EVENT_BUS, SHOPPING_RECONCILED
from basket.infra.storage import SaveResult, Storage
from basket.logic.fridge.check import FridgeCheck, reconcile, round_half_up
from basket.tests.samples import sample_list
from basket.utilities.constants import MSG_CHECK_DONE, MSG_CONFIRM_EMPTY_CHECK


class FailingSaveStorage(Storage):
    def save_shopping_list(self, shopping_list):
        return SaveResult(success=False, error="disk full")


def test_round_half_up():
    assert round_half_up(0.125) == 0.13
    assert round_half_up(1.0) == 1.0
    assert round_half_up(2.5 - 0.3) == 2.2


def test_reconcile_keeps_order():
    items = [ShoppingItem("A", 1, "L"), ShoppingItem("B", 500, "g"), ShoppingItem("C", 2, "Stück")]
    kept, removed, reduced = reconcile(items, {0: 1, 1: 200})
    assert [i.name for i in kept] == ["B", "C"]
    assert kept[0].amount == 300
    assert (removed, reduced) == (1, 1)


def test_reconcile_have_more_than_needed_removes():
    kept, removed, reduced = reconcile([ShoppingItem("Milch", 1, "L")], {0: 3})
    assert kept == []
    assert (removed, reduced) == (1, 0)


def test_reconcile_text_amount_is_removed():
    kept, removed, _ = reconcile([ShoppingItem("Salz", "etwas", "")], {0: "etwas"})
    assert kept == []
    assert removed == 1


def test_apply_removes_and_reduces(storage):
    storage.save_shopping_list(sample_list())
    check = FridgeCheck.start(storage)
    assert check.toggle(0) is True           # Milch, full amount
    assert check.toggle(1) is True           # Mehl
    assert check.set_have_amount(1, "200") is True

    seen = []
    listener = lambda name, payload: seen.append(payload)
    GLOBAL_EVENT_BUS.subscribe(SHOPPING_RECONCILED, listener)
    try:
        outcome = check.apply()
    finally:
        GLOBAL_EVENT_BUS.unsubscribe(SHOPPING_RECONCILED, listener)

    assert outcome.status == "applied"
    assert outcome.message == MSG_CHECK_DONE + "\n1 Artikel entfernt.\n1 Artikel reduziert."
    assert outcome.navigate.route == "shopping"
    stored = storage.load_shopping_list()
    assert [(i.name, i.amount) for i in stored.items] == [("Mehl", 300), ("Salz", "etwas")]
    assert stored.meta == {"createdAt": "2024-01-04"}
    assert seen == [{"removed": 1, "reduced": 1, "remaining": 2}]
    assert check.selection == {}


def test_decimal_amounts_round(storage):
    storage.save_shopping_list(ShoppingList([ShoppingItem("Milch", 1.5, "L")]))
    check = FridgeCheck.start(storage)
    check.toggle(0)
    check.set_have_amount(0, "0,5")
    check.apply()
    assert storage.load_shopping_list().items[0].amount == 1.0


def test_invalid_have_amount_ignored(storage):
    storage.save_shopping_list(sample_list())
    check = FridgeCheck.start(storage)
    # not selected yet
    assert check.set_have_amount(0, "1") is False
    check.toggle(0)
    assert check.set_have_amount(0, "abc") is False
    assert check.set_have_amount(0, "-1") is False
    assert check.selection[0] == 2
    # text amounts have no amount control
    check.toggle(2)
    assert check.set_have_amount(2, "1") is False


def test_toggle_twice_deselects(storage):
    storage.save_shopping_list(sample_list())
    check = FridgeCheck.start(storage)
    check.toggle(1)
    assert check.toggle(1) is False
    assert check.selection == {}
    with pytest.raises(NotFoundError):
        check.toggle(7)


def test_view_rows(storage):
    storage.save_shopping_list(sample_list())
    check = FridgeCheck.start(storage)
    check.toggle(0)
    view = check.view()
    assert view["empty"] is False
    assert view["selected_count"] == 1
    milk, flour, salt = view["items"]
    assert milk["needed"] == "Benötigt: 2 L"
    assert milk["editable"] is True and milk["have"] == 2 and milk["max"] == 4
    assert flour["selected"] is False and flour["editable"] is False
    assert salt["needed"] == "Benötigt: etwas"
    assert salt["max"] is None


def test_empty_selection_asks_first(storage):
    storage.save_shopping_list(sample_list())
    check = FridgeCheck.start(storage)
    outcome = check.apply()
    assert outcome.status == "needs_confirmation"
    assert outcome.message == MSG_CONFIRM_EMPTY_CHECK
    outcome = check.apply(confirm_empty=True)
    assert outcome.status == "skipped"
    assert outcome.navigate.route == "shopping"
    assert len(storage.load_shopping_list()) == 3


def test_no_list(storage):
    check = FridgeCheck.start(storage)
    assert check.view()["empty"] is True
    assert check.apply().status == "no_list"


def test_changed_list_is_rejected(storage):
    storage.save_shopping_list(sample_list())
    check = FridgeCheck.start(storage)
    check.toggle(0)
    changed = ShoppingList([ShoppingItem("Butter", 250, "g")] + sample_list().items)
    storage.save_shopping_list(changed)
    with pytest.raises(StaleSelectionError):
        check.apply()
    assert [i.name for i in storage.load_shopping_list().items][0] == "Butter"


def test_failed_save_raises_and_keeps_list(tmp_path):
    good = Storage(tmp_path, backup_on_save=False)
    good.save_shopping_list(sample_list())
    failing = FailingSaveStorage(tmp_path, backup_on_save=False)
    check = FridgeCheck.start(failing)
    check.toggle(0)
    with pytest.raises(PersistenceError) as exc:
        check.apply()
    assert "disk full" in exc.value.message
    assert len(good.load_shopping_list()) == 3
    # selection survives so the user can retry
    assert check.selection == {0: 2}


def test_milk_and_flour_example(storage):
    storage.save_shopping_list(ShoppingList([ShoppingItem("Milch", 1, "L"), ShoppingItem("Mehl", 2, "kg")]))
    check = FridgeCheck.start(storage)
    check.toggle(0)
    check.set_have_amount(0, "1.5")
    check.toggle(1)
    check.set_have_amount(1, "0.3")
    outcome = check.apply()
    assert (outcome.removed, outcome.reduced) == (1, 1)
    items = storage.load_shopping_list().items
    assert [(i.name, i.amount, i.unit) for i in items] == [("Mehl", 1.7, "kg")]


def test_stored_infinite_amount_is_not_reduced(tmp_path):
    (tmp_path / "shopping_list.json").write_text(
        '{"items": [{"name": "Wasser", "amount": Infinity, "unit": "L"}, {"name": "Brot", "amount": 1, "unit": "Stück"}]}',
        encoding="utf-8",
    )
    storage = Storage(tmp_path, backup_on_save=False)
    check = FridgeCheck.start(storage)
    water = check.view()["items"][0]
    assert water["max"] is None
    assert water["editable"] is False
    check.toggle(0)
    assert check.set_have_amount(0, "2") is False
    outcome = check.apply()
    assert (outcome.removed, outcome.reduced) == (1, 0)
    assert [i.name for i in storage.load_shopping_list().items] == ["Brot"]
