import json

import pytest

from basket.domain.Recipe import Recipe
from basket.tests.samples import sample_recipe_dict


@pytest.fixture
def with_recipe(storage):
    storage.save_recipes([Recipe.from_dict(sample_recipe_dict("r1"))])
    return storage


def test_list_and_get(client, with_recipe):
    assert client.get('/api/recipes').json() == [{"id": "r1", "name": "Pfannkuchen", "servings": 2}]
    assert client.get('/api/recipes/r1').json()["ingredients"][0]["name"] == "Mehl"
    assert client.get('/api/recipes/r9').status_code == 404


def test_edit_view(client, with_recipe):
    view = client.get('/api/recipes/r1/edit').json()
    assert view["id"] == "r1"
    assert len(view["rows"]) == 2


def test_update(client, with_recipe):
    rows = [{"amount": "3", "unit": "Stück", "name": "Eier"}]
    resp = client.post('/api/recipes/r1', data={
        "name": "Omelett", "servings": "1", "instructions": "Braten", "ingredients": json.dumps(rows),
    })
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["navigate"]["url"] == "/recipes/r1"
    saved = with_recipe.load_recipes()[0]
    assert saved.name == "Omelett"
    assert [(i.amount, i.unit, i.name) for i in saved.ingredients] == [(3, "Stück", "Eier")]


def test_update_validation(client, with_recipe):
    resp = client.post('/api/recipes/r1', data={"name": "Omelett", "servings": "1", "ingredients": "[]"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Bitte füge mindestens eine Zutat hinzu"

    resp = client.post('/api/recipes/r1', data={"name": "Omelett", "servings": "1", "ingredients": "{kaputt"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Bitte überprüfe die Zutaten"
    assert with_recipe.load_recipes()[0].name == "Pfannkuchen"
