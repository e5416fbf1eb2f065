def test_get_without_list(client):
    resp = client.get('/api/shopping-list')
    assert resp.status_code == 200
    assert resp.json() == {"list": None, "count": 0}


def test_put_get_delete(client, storage):
    payload = {
        "createdAt": "2024-01-04",
        "items": [
            {"name": "Milch", "amount": 2, "unit": "L"},
            {"name": "Salz", "amount": "etwas", "unit": "", "recipeId": "r1"},
        ],
    }
    resp = client.put('/api/shopping-list', json=payload)
    assert resp.status_code == 200, resp.text
    assert resp.json()["count"] == 2

    data = client.get('/api/shopping-list').json()
    assert data["list"]["createdAt"] == "2024-01-04"
    assert data["list"]["items"][1]["recipeId"] == "r1"
    assert storage.load_shopping_list().items[0].amount == 2

    assert client.delete('/api/shopping-list').json() == {"cleared": True}
    assert storage.load_shopping_list() is None


def test_put_rejects_nameless_item(client):
    resp = client.put('/api/shopping-list', json={"items": [{"name": "", "amount": 1}]})
    assert resp.status_code == 422


def test_put_rejects_unusable_amounts(client, storage):
    for raw in ('1e400', '-2', 'NaN'):
        body = '{"items": [{"name": "Milch", "amount": %s, "unit": "L"}]}' % raw
        resp = client.put('/api/shopping-list', content=body, headers={"content-type": "application/json"})
        assert resp.status_code == 400, raw
        assert resp.json()["error"].startswith("Milch: ")
    assert storage.load_shopping_list() is None
    # the fridge check still opens afterwards
    assert client.post('/api/fridge-check').status_code == 200
