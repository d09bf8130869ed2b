# tests/test_routes/test_sales_routes.py
from decimal import Decimal


def _seed_stock(client, headers, product, quantity):
    response = client.post(
        "/api/inventory",
        json={"product_id": product.id, "quantity": quantity},
        headers=headers,
    )
    assert response.status_code == 200


def _stock(client, headers, product):
    rows = client.get("/api/inventory", params={"product_id": product.id}, headers=headers).json()
    return Decimal(rows[0]["quantity"])


def test_sale_status_flow(client, cooperative, aggregator, wheat, auth_headers):
    fpo = auth_headers(cooperative)
    admin = auth_headers(aggregator)
    _seed_stock(client, fpo, wheat, 15)

    sale = client.post(
        "/api/sales",
        json={"product_id": wheat.id, "quantity": 4, "rate": 30},
        headers=fpo,
    ).json()
    assert sale["status"] == "pending"
    assert _stock(client, fpo, wheat) == Decimal("15")

    completed = client.put(f"/api/sales/{sale['id']}/status", json={"status": "completed"}, headers=admin)
    assert completed.status_code == 200
    assert _stock(client, fpo, wheat) == Decimal("11")

    client.put(f"/api/sales/{sale['id']}/status", json={"status": "rejected"}, headers=admin)
    assert _stock(client, fpo, wheat) == Decimal("15")

    pending = client.get("/api/sales", params={"status": "rejected"}, headers=admin).json()
    assert [s["id"] for s in pending] == [sale["id"]]


def test_invalid_status_is_bad_request(client, cooperative, aggregator, wheat, auth_headers):
    sale = client.post(
        "/api/sales",
        json={"product_id": wheat.id, "quantity": 4, "rate": 30},
        headers=auth_headers(cooperative),
    ).json()

    response = client.put(
        f"/api/sales/{sale['id']}/status",
        json={"status": "shipped"},
        headers=auth_headers(aggregator),
    )

    assert response.status_code == 400
    assert response.json()["detail"].startswith("Valid status is required")


def test_cooperative_cannot_complete_its_own_sale(client, cooperative, wheat, auth_headers):
    headers = auth_headers(cooperative)
    sale = client.post(
        "/api/sales",
        json={"product_id": wheat.id, "quantity": 4, "rate": 30},
        headers=headers,
    ).json()

    response = client.put(f"/api/sales/{sale['id']}/status", json={"status": "completed"}, headers=headers)

    assert response.status_code == 403


def test_dispatch_routes(client, cooperative, aggregator, retailer, wheat, auth_headers):
    created = client.post(
        "/api/dispatches",
        json={
            "cooperative_id": cooperative.id,
            "retailer_id": retailer.id,
            "product_id": wheat.id,
            "quantity": 40,
            "rate": 25,
        },
        headers=auth_headers(aggregator),
    )
    assert created.status_code == 201
    dispatch = created.json()
    assert Decimal(dispatch["lot_threshold"]) == Decimal("20000")

    accepted = client.put(
        f"/api/dispatches/{dispatch['id']}/status",
        json={"status": "completed"},
        headers=auth_headers(retailer),
    )
    assert accepted.status_code == 200
    assert accepted.json()["status"] == "completed"

    assert len(client.get("/api/dispatches", headers=auth_headers(retailer)).json()) == 1
