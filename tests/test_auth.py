from datetime import timedelta

import jwt

from conftest import make_token


def test_missing_token_is_rejected(client):
    response = client.get("/api/stores")

    assert response.status_code == 401
    assert response.get_json()["message"] == "Authentication Required"


def test_expired_token_is_rejected(client):
    token = make_token("someone", expires_in=timedelta(seconds=-10))

    response = client.get("/api/stores", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.get_json()["message"] == "Token expired"


def test_token_signed_with_another_secret_is_rejected(client):
    token = jwt.encode({"sub": "someone", "exp": 4102444800}, "not-the-secret", algorithm="HS256")

    response = client.get("/api/stores", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.get_json()["message"] == "Invalid token"


def test_empty_bearer_is_rejected(client):
    response = client.post("/api/stores", json={"name": "x"}, headers={"Authorization": "Bearer "})

    assert response.status_code == 401


def test_public_reads_do_not_need_a_token(client, catalog):
    response = client.get(f"/api/stores/{catalog['store_id']}/categories")

    assert response.status_code == 200
