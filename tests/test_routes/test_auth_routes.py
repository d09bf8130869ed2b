# tests/test_routes/test_auth_routes.py
def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_token_issued_for_valid_credentials(client, cooperative, account_password):
    response = client.post(
        "/api/auth/token",
        data={"username": "greenvalley", "password": account_password},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["role"] == "fpo"
    assert body["account_id"] == cooperative.id

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["username"] == "greenvalley"


def test_json_login_accepts_username_field(client, aggregator, account_password):
    response = client.post("/api/auth/login", json={"username": "admin", "password": account_password})

    assert response.status_code == 200
    assert response.json()["role"] == "mahafpc"


def test_wrong_password_is_unauthorized(client, retailer):
    response = client.post(
        "/api/auth/token",
        data={"username": "raigad", "password": "not-the-password"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Incorrect credentials"


def test_protected_routes_require_a_token(client):
    assert client.get("/api/procurements").status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_disabled_account_is_forbidden(client, db_session, cooperative, auth_headers):
    cooperative.is_active = False
    db_session.commit()

    response = client.get("/api/auth/me", headers=auth_headers(cooperative))

    assert response.status_code == 403
