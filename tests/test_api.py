"""
HTTP surface: auth, master data, stock movements, ledger and dashboard.
"""
import pytest

from zaiko.models import Product, Warehouse


def _stock_body(product, warehouse, quantity, note=None):
    return {
        "product_id": str(product.id),
        "warehouse_id": str(warehouse.id),
        "quantity": quantity,
        "note": note,
    }


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_status_is_open(client):
    response = client.get("/api/status")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_login_rejects_bad_password(client, user):
    response = client.post("/api/auth/login", json={"username": user.username, "password": "wrong"})
    assert response.status_code == 401


def test_me(auth_client, user):
    response = auth_client.get("/api/auth/me")
    assert response.status_code == 200
    assert response.json()["username"] == user.username


def test_stock_movements_require_auth(client, product, warehouse):
    response = client.post("/api/stock/in", json=_stock_body(product, warehouse, 5))
    assert response.status_code == 401


def test_bad_token_is_rejected(client):
    response = client.get("/api/products", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


@pytest.mark.parametrize("method, path", [
    ("get", "/api/stock"),
    ("get", "/api/stock/transactions"),
    ("get", "/api/stock/low-stock"),
    ("get", "/api/dashboard/summary"),
    ("get", "/api/dashboard/aggregates"),
    ("get", "/api/categories"),
    ("get", "/api/products"),
    ("get", "/api/warehouses"),
])
def test_reads_require_auth(client, method, path):
    assert getattr(client, method)(path).status_code == 401


def test_master_data_writes_require_auth(db, client, category, product, warehouse):
    assert client.post("/api/warehouses", json={"name": "Sendai"}).status_code == 401
    assert client.post("/api/categories", json={"name": "Tools"}).status_code == 401
    assert client.post("/api/products", json={"code": "Z-1", "name": "Tape", "unit": "roll"}).status_code == 401
    assert client.put(f"/api/products/{product.id}", json={"name": "Renamed"}).status_code == 401
    assert client.put(f"/api/warehouses/{warehouse.id}", json={"name": "Renamed"}).status_code == 401
    assert client.delete(f"/api/products/{product.id}").status_code == 401
    assert client.delete(f"/api/warehouses/{warehouse.id}").status_code == 401
    assert client.delete(f"/api/categories/{category.id}").status_code == 401

    db.expire_all()
    assert db.query(Product).count() == 1
    assert db.query(Product).one().name == "Printer Paper A4"
    assert db.query(Warehouse).count() == 1


def test_stock_in_out_flow(auth_client, product, warehouse, user):
    response = auth_client.post("/api/stock/in", json=_stock_body(product, warehouse, 10, "init"))
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Stock received successfully"
    assert body["transaction"]["type"] == "in"
    assert body["transaction"]["quantity"] == 10
    assert body["transaction"]["user_id"] == str(user.id)

    response = auth_client.post("/api/stock/out", json=_stock_body(product, warehouse, 4, "ship"))
    assert response.status_code == 200
    assert response.json()["message"] == "Stock shipped successfully"

    response = auth_client.post("/api/stock/out", json=_stock_body(product, warehouse, 7, "ship"))
    assert response.status_code == 400
    assert response.json() == {"error": "Insufficient stock", "available": 6, "requested": 7}

    stock = auth_client.get("/api/stock").json()
    assert len(stock) == 1
    assert stock[0]["quantity"] == 6
    assert stock[0]["product"]["code"] == "P-001"
    assert stock[0]["warehouse"]["name"] == "Tokyo Main"

    ledger = auth_client.get("/api/stock/transactions").json()
    assert [e["type"] for e in ledger] == ["out", "in"]
    assert ledger[0]["user"]["username"] == user.username

    assert len(auth_client.get("/api/stock/transactions", params={"type": "in"}).json()) == 1
    assert len(auth_client.get("/api/stock/transactions", params={"limit": 1}).json()) == 1


def test_stock_in_rejects_non_positive_quantity(auth_client, product, warehouse):
    response = auth_client.post("/api/stock/in", json=_stock_body(product, warehouse, 0))
    assert response.status_code == 400
    assert "Quantity" in response.json()["error"]


def test_stock_in_unknown_product(auth_client, warehouse):
    body = {
        "product_id": "00000000-0000-0000-0000-000000000001",
        "warehouse_id": str(warehouse.id),
        "quantity": 1,
    }
    response = auth_client.post("/api/stock/in", json=body)
    assert response.status_code == 404


def test_unknown_transaction_type_filter(auth_client):
    response = auth_client.get("/api/stock/transactions", params={"type": "moved"})
    assert response.status_code == 400


def test_low_stock_and_dashboard(auth_client, product, warehouse):
    auth_client.post("/api/stock/in", json=_stock_body(product, warehouse, 3))

    low = auth_client.get("/api/stock/low-stock").json()
    assert [row["quantity"] for row in low] == [3]
    assert auth_client.get("/api/stock/low-stock", params={"threshold": 2}).json() == []

    summary = auth_client.get("/api/dashboard/summary").json()
    assert summary["total_on_hand"] == 3
    assert summary["low_stock_pairs"] == 1
    assert summary["total_products"] == 1
    assert summary["per_warehouse"][0]["total_quantity"] == 3
    assert len(summary["recent_transactions"]) == 1


def test_product_crud(auth_client, category):
    response = auth_client.post("/api/products", json={
        "code": "X-1", "name": "Stapler", "unit": "pcs", "category_id": str(category.id)
    })
    assert response.status_code == 201
    product_id = response.json()["id"]
    assert response.json()["category"]["name"] == "Consumables"

    duplicate = auth_client.post("/api/products", json={"code": "X-1", "name": "Other", "unit": "pcs"})
    assert duplicate.status_code == 409

    response = auth_client.put(f"/api/products/{product_id}", json={"name": "Heavy Stapler", "category_id": None})
    assert response.status_code == 200
    assert response.json()["name"] == "Heavy Stapler"
    assert response.json()["category_id"] is None

    assert [p["code"] for p in auth_client.get("/api/products", params={"search": "stap"}).json()] == ["X-1"]

    assert auth_client.delete(f"/api/products/{product_id}").status_code == 200
    assert auth_client.get(f"/api/products/{product_id}").status_code == 404


def test_product_with_stock_history_cannot_be_deleted(auth_client, product, warehouse):
    auth_client.post("/api/stock/in", json=_stock_body(product, warehouse, 1))

    assert auth_client.delete(f"/api/products/{product.id}").status_code == 409
    assert auth_client.delete(f"/api/warehouses/{warehouse.id}").status_code == 409


def test_warehouse_and_category_crud(auth_client):
    response = auth_client.post("/api/warehouses", json={"name": "Nagoya", "location": "Aichi"})
    assert response.status_code == 201
    warehouse_id = response.json()["id"]

    response = auth_client.put(f"/api/warehouses/{warehouse_id}", json={"location": None})
    assert response.json()["location"] is None
    assert response.json()["name"] == "Nagoya"

    assert auth_client.delete(f"/api/warehouses/{warehouse_id}").status_code == 200
    assert auth_client.get(f"/api/warehouses/{warehouse_id}").status_code == 404

    category = auth_client.post("/api/categories", json={"name": "Tools"}).json()
    product = auth_client.post("/api/products", json={
        "code": "T-1", "name": "Hammer", "unit": "pcs", "category_id": category["id"]
    }).json()

    assert auth_client.delete(f"/api/categories/{category['id']}").status_code == 200
    assert auth_client.get(f"/api/products/{product['id']}").json()["category_id"] is None
