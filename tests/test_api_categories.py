def test_categories_crud(client, make_category):
    groceries = make_category("Groceries", "🛒", "expense")
    make_category("Salary", "💼", "income")
    make_category("Bills", "💡", "expense")

    r = client.get("/api/categories", params={"type": "expense"})
    assert r.status_code == 200
    assert [c["name"] for c in r.json()] == ["Bills", "Groceries"]

    r = client.get("/api/categories")
    assert len(r.json()) == 3

    assert client.delete(f"/api/categories/{groceries['id']}").status_code == 204
    names = [c["name"] for c in client.get("/api/categories", params={"type": "expense"}).json()]
    assert names == ["Bills"]


def test_duplicate_category_conflicts(client, make_category):
    make_category("Groceries", "🛒", "expense")
    r = client.post("/api/categories", json={"name": "Groceries", "icon": "🥦", "type": "expense"})
    assert r.status_code == 409
    # same name is allowed for the other type
    make_category("Groceries", "🛒", "income")


def test_category_validation(client):
    r = client.post("/api/categories", json={"name": "ab", "icon": "x", "type": "expense"})
    assert r.status_code == 422
    r = client.post("/api/categories", json={"name": "Travel", "icon": "✈️", "type": "transfer"})
    assert r.status_code == 422


def test_delete_missing_category(client):
    assert client.delete("/api/categories/9999").status_code == 404


def test_deleting_category_keeps_transaction_snapshot(client, make_category, make_transaction):
    cat = make_category("Coffee", "☕", "expense")
    make_transaction("Coffee", 4.5, "2024-03-02T08:00:00Z", description="latte")

    assert client.delete(f"/api/categories/{cat['id']}").status_code == 204

    r = client.get("/api/transactions-history", params={
        "from": "2024-03-01T00:00:00Z",
        "to": "2024-03-31T23:59:59Z",
    })
    assert r.status_code == 200, r.text
    rows = r.json()
    assert len(rows) == 1
    assert rows[0]["category"] == "Coffee"
    assert rows[0]["categoryIcon"] == "☕"
