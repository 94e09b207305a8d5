"""Integration tests for category, transaction and budget endpoints"""

import pytest
from fastapi.testclient import TestClient
from finance_tracker.infrastructure.security.tokens import issue_token

pytestmark = pytest.mark.integration


@pytest.fixture
def other_headers(other_user) -> dict:
    return {"Authorization": f"Bearer {issue_token(other_user.id)}"}


@pytest.fixture
def category(client: TestClient, auth_headers: dict) -> dict:
    response = client.post(
        "/v1/categories",
        json={"name": "Test Category", "type": "expense", "color": "blue", "icon": "shopping-cart"},
        headers=auth_headers,
    )
    assert response.status_code == 201
    return response.json()


def test_category_lifecycle(client: TestClient, auth_headers: dict, user, category: dict):
    assert category["userId"] == str(user.id)
    assert category["name"] == "Test Category"
    assert "createdAt" in category

    fetched = client.get(f"/v1/categories/{category['id']}", headers=auth_headers)
    assert fetched.status_code == 200
    assert fetched.json()["type"] == "expense"

    updated = client.put(
        f"/v1/categories/{category['id']}",
        json={"name": "Updated Category", "type": "income", "color": "green", "icon": "dollar-sign"},
        headers=auth_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["name"] == "Updated Category"
    assert updated.json()["type"] == "income"
    assert updated.json()["color"] == "green"

    listed = client.get("/v1/categories", headers=auth_headers)
    assert [c["id"] for c in listed.json()] == [category["id"]]

    deleted = client.delete(f"/v1/categories/{category['id']}", headers=auth_headers)
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Category deleted successfully"}

    assert client.get(f"/v1/categories/{category['id']}", headers=auth_headers).status_code == 404


def test_category_invalid_type(client: TestClient, auth_headers: dict):
    response = client.post("/v1/categories", json={"name": "Odd", "type": "transfer"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] is True


def test_category_bad_id(client: TestClient, auth_headers: dict):
    response = client.get("/v1/categories/not-a-uuid", headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {"error": True, "message": "Invalid category ID format"}


def test_categories_are_private(client: TestClient, other_headers: dict, category: dict):
    assert client.get(f"/v1/categories/{category['id']}", headers=other_headers).status_code == 404
    assert client.get("/v1/categories", headers=other_headers).json() == []
    assert client.delete(f"/v1/categories/{category['id']}", headers=other_headers).status_code == 404


def test_transaction_lifecycle(client: TestClient, auth_headers: dict, category: dict):
    created = client.post(
        "/v1/transactions",
        json={
            "categoryId": category["id"],
            "amount": 50.00,
            "type": "expense",
            "date": "2025-01-15T10:30:00Z",
            "note": "Groceries",
        },
        headers=auth_headers,
    )
    assert created.status_code == 201
    transaction = created.json()
    assert transaction["amount"] == 50.0
    assert transaction["categoryId"] == category["id"]
    assert transaction["date"].startswith("2025-01-15T10:30:00")

    updated = client.put(
        f"/v1/transactions/{transaction['id']}",
        json={"amount": 42.5, "note": None},
        headers=auth_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["amount"] == 42.5
    assert updated.json()["note"] is None
    assert updated.json()["type"] == "expense"

    january = client.get("/v1/transactions?month=2025-01", headers=auth_headers).json()
    february = client.get("/v1/transactions?month=2025-02", headers=auth_headers).json()
    assert [t["id"] for t in january] == [transaction["id"]]
    assert february == []

    deleted = client.delete(f"/v1/transactions/{transaction['id']}", headers=auth_headers)
    assert deleted.json() == {"message": "Transaction deleted successfully"}
    assert client.get(f"/v1/transactions/{transaction['id']}", headers=auth_headers).status_code == 404


def test_transaction_negative_amount_rejected(client: TestClient, auth_headers: dict, category: dict):
    response = client.post(
        "/v1/transactions",
        json={"categoryId": category["id"], "amount": -5, "type": "expense", "date": "2025-01-15T10:30:00Z"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"] is True


def test_transaction_missing_fields_rejected(client: TestClient, auth_headers: dict):
    response = client.post("/v1/transactions", json={"amount": 5}, headers=auth_headers)

    assert response.status_code == 400


def test_transaction_requires_own_category(client: TestClient, other_headers: dict, category: dict):
    response = client.post(
        "/v1/transactions",
        json={"categoryId": category["id"], "amount": 5, "type": "expense", "date": "2025-01-15T10:30:00Z"},
        headers=other_headers,
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Unknown category"


def test_transaction_list_invalid_month(client: TestClient, auth_headers: dict):
    response = client.get("/v1/transactions?month=2025-13", headers=auth_headers)

    assert response.status_code == 400


def test_budget_lifecycle(client: TestClient, auth_headers: dict, user, category: dict):
    created = client.post(
        "/v1/budgets",
        json={"userId": str(user.id), "categoryId": category["id"], "month": "2025-01", "limit": 1, "spent": 0},
        headers=auth_headers,
    )
    assert created.status_code == 201
    budget = created.json()
    assert budget["userId"] == str(user.id)
    assert budget["categoryId"] == category["id"]
    assert "createdAt" in budget

    updated = client.put(
        f"/v1/budgets/{budget['id']}",
        json={"categoryId": category["id"], "month": "2025-02", "limit": 2},
        headers=auth_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["limit"] == 2
    assert updated.json()["month"] == "2025-02"

    assert len(client.get("/v1/budgets", headers=auth_headers).json()) == 1

    deleted = client.delete(f"/v1/budgets/{budget['id']}", headers=auth_headers)
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Budget deleted successfully"}


def test_budget_invalid_month(client: TestClient, auth_headers: dict, category: dict):
    response = client.post(
        "/v1/budgets",
        json={"categoryId": category["id"], "month": "2025-13", "limit": 10},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert "YYYY-MM" in response.json()["message"]


def test_budget_not_found(client: TestClient, auth_headers: dict):
    response = client.get("/v1/budgets/00000000-0000-0000-0000-000000000000", headers=auth_headers)

    assert response.status_code == 404
    assert response.json() == {"error": True, "message": "Budget not found"}
