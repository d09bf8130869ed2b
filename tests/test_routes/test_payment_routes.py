# tests/test_routes/test_payment_routes.py
from decimal import Decimal


def test_farmer_payment_over_http(client, cooperative, other_cooperative, farmer, auth_headers):
    headers = auth_headers(cooperative)

    created = client.post(
        "/api/payments",
        json={"farmer_id": farmer.id, "amount": "1500", "paid_on": "2024-06-05"},
        headers=headers,
    )

    assert created.status_code == 201
    body = created.json()
    assert body["type"] == "farmer_payment"
    assert body["status"] == "completed"
    assert Decimal(body["amount"]) == Decimal("1500")
    assert client.get(f"/api/payments/{body['id']}", headers=headers).status_code == 200
    assert client.get(f"/api/payments/{body['id']}", headers=auth_headers(other_cooperative)).status_code == 403


def test_aggregator_payment_status_flow(client, cooperative, aggregator, auth_headers):
    admin = auth_headers(aggregator)

    created = client.post(
        "/api/payments",
        json={"cooperative_id": cooperative.id, "type": "advance", "amount": 5000},
        headers=admin,
    )
    assert created.status_code == 201
    payment = created.json()
    assert payment["status"] == "pending"

    completed = client.put(f"/api/payments/{payment['id']}/status", json={"status": "completed"}, headers=admin)
    assert completed.status_code == 200
    assert completed.json()["status"] == "completed"

    invalid = client.put(f"/api/payments/{payment['id']}/status", json={"status": "paid"}, headers=admin)
    assert invalid.status_code == 400

    patched = client.patch(f"/api/payments/{payment['id']}", json={"description": "June advance"}, headers=admin)
    assert patched.json()["description"] == "June advance"

    listed = client.get("/api/payments", params={"status": "completed"}, headers=auth_headers(cooperative))
    assert [p["id"] for p in listed.json()] == [payment["id"]]


def test_aggregator_payment_needs_cooperative_and_type(client, aggregator, auth_headers):
    response = client.post("/api/payments", json={"amount": 10}, headers=auth_headers(aggregator))

    assert response.status_code == 400
    assert response.json() == {"detail": "Type, amount, date, and FPO ID are required"}


def test_oversized_payment_amount_is_422(client, cooperative, farmer, auth_headers):
    response = client.post(
        "/api/payments",
        json={"farmer_id": farmer.id, "amount": "1e30"},
        headers=auth_headers(cooperative),
    )

    assert response.status_code == 422


def test_retailer_sees_no_payments(client, cooperative, aggregator, retailer, auth_headers):
    client.post(
        "/api/payments",
        json={"cooperative_id": cooperative.id, "type": "advance", "amount": 5000},
        headers=auth_headers(aggregator),
    )

    assert client.get("/api/payments", headers=auth_headers(retailer)).json() == []


def test_fpo_directory_and_daily_records(client, cooperative, aggregator, farmer, wheat, auth_headers):
    fpo = auth_headers(cooperative)
    admin = auth_headers(aggregator)
    client.post(
        "/api/procurements",
        json={"farmer_id": farmer.id, "product_id": wheat.id, "quantity": 2, "rate": 10, "procured_on": "2024-06-01"},
        headers=fpo,
    )

    fpos = client.get("/api/fpo", headers=fpo).json()
    assert [f["id"] for f in fpos] == [cooperative.id]
    assert "password_hash" not in fpos[0]
    assert client.get(f"/api/fpo/{cooperative.id}", headers=fpo).json()["name"] == "Green Valley FPO"
    assert client.get(f"/api/fpo/{aggregator.id}", headers=fpo).status_code == 404

    records = client.get(
        f"/api/fpo/{cooperative.id}/daily-records",
        params={"date": "2024-06-01"},
        headers=admin,
    )
    assert records.status_code == 200
    body = records.json()
    assert len(body["procurements"]) == 1
    assert body["sales"] == []
    assert [a["type"] for a in body["activities"]] == ["procurement"]

    other_day = client.get(
        f"/api/fpo/{cooperative.id}/daily-records",
        params={"date": "2024-06-02"},
        headers=admin,
    ).json()
    assert other_day["procurements"] == []

    assert client.get(f"/api/fpo/{cooperative.id}/daily-records", headers=fpo).status_code == 403


def test_farmer_by_id_routes(client, cooperative, other_cooperative, farmer, auth_headers):
    headers = auth_headers(cooperative)

    assert client.get(f"/api/farmers/{farmer.id}", headers=headers).json()["name"] == "Ramesh Patil"
    assert client.get(f"/api/farmers/{farmer.id}", headers=auth_headers(other_cooperative)).status_code == 403

    patched = client.patch(f"/api/farmers/{farmer.id}", json={"village_name": "Ambegaon"}, headers=headers)
    assert patched.status_code == 200
    assert patched.json()["village_name"] == "Ambegaon"

    bad_mobile = client.patch(f"/api/farmers/{farmer.id}", json={"mobile_number": "12"}, headers=headers)
    assert bad_mobile.status_code == 400

    assert client.delete(f"/api/farmers/{farmer.id}", headers=auth_headers(other_cooperative)).status_code == 403
    assert client.delete(f"/api/farmers/{farmer.id}", headers=headers).status_code == 204
    assert client.get(f"/api/farmers/{farmer.id}", headers=headers).status_code == 404
