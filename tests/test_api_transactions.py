import csv
import io

import pytest

RANGE = {"from": "2024-03-01T00:00:00Z", "to": "2024-03-31T23:59:59Z"}


@pytest.fixture()
def seeded(make_category, make_transaction):
    make_category("Groceries", "🛒", "expense")
    make_category("Rent", "🏠", "expense")
    make_category("Salary", "💼", "income")
    created = []
    for day in range(1, 11):
        if day % 3 == 0:
            created.append(make_transaction("Salary", 1000 + day, f"2024-03-{day:02d}T09:00:00Z", "income", f"pay {day}"))
        elif day % 2 == 0:
            created.append(make_transaction("Rent", 500, f"2024-03-{day:02d}T09:00:00Z", description=f"rent {day}"))
        else:
            created.append(make_transaction("Groceries", 10.5 * day, f"2024-03-{day:02d}T09:00:00Z", description=f"shop {day}"))
    return created


def test_create_transaction_snapshots_category(client, make_category):
    make_category("Groceries", "🛒", "expense")
    r = client.post("/api/transactions", json={
        "amount": 12.34,
        "description": "apples",
        "date": "2024-03-05T12:00:00Z",
        "category": "Groceries",
        "type": "expense",
    })
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["category"] == "Groceries"
    assert body["categoryIcon"] == "🛒"
    assert "category_icon" not in body
    assert body["amount"] == 12.34


def test_create_requires_matching_category(client, make_category):
    make_category("Salary", "💼", "income")
    r = client.post("/api/transactions", json={
        "amount": 5,
        "date": "2024-03-05T12:00:00Z",
        "category": "Salary",
        "type": "expense",
    })
    assert r.status_code == 400
    assert r.json()["detail"] == "Category not found"


@pytest.mark.parametrize("payload", [
    {"amount": 0, "date": "2024-03-05T12:00:00Z"},
    {"amount": -3, "date": "2024-03-05T12:00:00Z"},
    {"amount": 3, "date": "1899-12-31T00:00:00Z"},
    {"amount": 3, "date": "2999-01-01T00:00:00Z"},
])
def test_create_validation(client, make_category, payload):
    make_category("Groceries", "🛒", "expense")
    r = client.post("/api/transactions", json={**payload, "category": "Groceries", "type": "expense"})
    assert r.status_code == 422


def test_delete_transaction(client, seeded):
    target = seeded[0]
    assert client.delete(f"/api/transactions/{target['id']}").status_code == 204
    assert client.delete(f"/api/transactions/{target['id']}").status_code == 404
    rows = client.get("/api/transactions-history", params=RANGE).json()
    assert len(rows) == 9
    assert str(target["id"]) not in {r["id"] for r in rows}


def test_history_is_newest_first_and_formatted(client, seeded):
    rows = client.get("/api/transactions-history", params=RANGE).json()
    assert len(rows) == 10
    assert rows[0]["description"] == "rent 10"
    assert rows[-1]["description"] == "shop 1"
    assert rows[-1]["formattedAmount"] == "$10.50"
    assert rows[0]["date"] == "2024-03-10T09:00:00.000Z"


def test_history_range_is_inclusive(client, seeded):
    rows = client.get("/api/transactions-history", params={
        "from": "2024-03-02T09:00:00Z",
        "to": "2024-03-04T09:00:00Z",
    }).json()
    assert [r["description"] for r in rows] == ["rent 4", "pay 3", "rent 2"]


def test_history_range_validation(client):
    r = client.get("/api/transactions-history", params={"from": "2024-03-10T00:00:00Z", "to": "2024-03-01T00:00:00Z"})
    assert r.status_code == 400
    r = client.get("/api/transactions-history", params={"from": "2024-01-01T00:00:00Z", "to": "2024-12-31T00:00:00Z"})
    assert r.status_code == 400
    assert "Date range too big" in r.json()["detail"]


def test_history_sees_new_transactions(client, seeded, make_transaction):
    assert len(client.get("/api/transactions-history", params=RANGE).json()) == 10
    make_transaction("Groceries", 1, "2024-03-20T09:00:00Z")
    assert len(client.get("/api/transactions-history", params=RANGE).json()) == 11


def test_table_first_page_and_facets(client, seeded):
    r = client.get("/api/transactions-table", params=RANGE)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["page_size"] == 8
    assert body["page_count"] == 2
    assert body["total_count"] == 10
    assert body["filtered_count"] == 10
    assert len(body["rows"]) == 8
    assert body["can_next"] is True
    assert body["can_previous"] is False
    assert {o["value"] for o in body["facets"]["categories"]} == {"Groceries", "Rent", "Salary"}
    assert body["facets"]["types"] == [
        {"label": "Income", "value": "income"},
        {"label": "Expense", "value": "expense"},
    ]
    assert body["has_active_filters"] is False
    assert body["currency"] == "USD"


def test_table_filters_sort_and_page(client, seeded):
    r = client.get("/api/transactions-table", params={**RANGE, "type": "income", "sort": "amount"})
    body = r.json()
    assert body["filtered_count"] == 3
    assert [row["amount"] for row in body["rows"]] == [1003, 1006, 1009]
    assert body["has_active_filters"] is True
    assert len(body["facets"]["types"]) == 2

    r = client.get("/api/transactions-table", params={**RANGE, "search": "SHOP", "page": 0})
    assert {row["category"] for row in r.json()["rows"]} == {"Groceries"}

    r = client.get("/api/transactions-table", params={**RANGE, "category": ["Rent", "Salary"], "sort": "date", "desc": True})
    descriptions = [row["description"] for row in r.json()["rows"]]
    assert descriptions[:3] == ["rent 10", "pay 9", "rent 8"]

    r = client.get("/api/transactions-table", params={**RANGE, "page": 1})
    assert len(r.json()["rows"]) == 2

    # past the end: empty page, index kept
    r = client.get("/api/transactions-table", params={**RANGE, "page": 5})
    body = r.json()
    assert body["rows"] == []
    assert body["page_index"] == 5


def test_table_uses_user_currency(client, seeded):
    client.put("/api/user-settings", json={"currency": "GBP"})
    body = client.get("/api/transactions-table", params={**RANGE, "search": "£1,003.00"}).json()
    assert body["currency"] == "GBP"
    assert [row["description"] for row in body["rows"]] == ["pay 3"]


def test_export_contains_all_filtered_rows(client, seeded):
    r = client.get("/api/transactions-table/export", params={**RANGE, "type": "expense"})
    assert r.status_code == 200, r.text
    assert r.headers["content-type"].startswith("text/csv")
    assert "attachment" in r.headers["content-disposition"]
    records = list(csv.DictReader(io.StringIO(r.text, newline="")))
    assert len(records) == 7
    assert set(records[0]) == {"category", "categoryIcon", "description", "type", "amount", "formattedAmount", "date"}
    assert {rec["type"] for rec in records} == {"expense"}


def test_export_keeps_filter_order_when_sorted(client, seeded):
    params = {**RANGE, "type": "expense"}
    plain = client.get("/api/transactions-table/export", params=params)
    sorted_export = client.get("/api/transactions-table/export", params={**params, "sort": "amount", "desc": True})
    assert sorted_export.status_code == 200, sorted_export.text
    assert sorted_export.text == plain.text
    assert sorted_export.headers["x-total-count"] == "7"
