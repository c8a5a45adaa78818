from bson import ObjectId

from shop_admin.extensions.db import db


def test_create_and_list_own_stores(client, owner_headers, stranger_headers):
    created = client.post("/api/stores", json={"name": "First"}, headers=owner_headers)
    client.post("/api/stores", json={"name": "Not mine"}, headers=stranger_headers)

    assert created.status_code == 201
    body = created.get_json()
    assert body["name"] == "First"
    assert body["user_id"] == "user_owner"
    assert ObjectId.is_valid(body["id"])

    listed = client.get("/api/stores", headers=owner_headers).get_json()
    assert [store["name"] for store in listed] == ["First"]


def test_create_requires_a_name(client, owner_headers):
    response = client.post("/api/stores", json={"name": "   "}, headers=owner_headers)

    assert response.status_code == 400
    assert response.get_json()["message"] == "Invalid store data"


def test_get_store_is_public(client, catalog):
    response = client.get(f"/api/stores/{catalog['store_id']}")

    assert response.status_code == 200
    assert response.get_json()["name"] == "Main"


def test_get_unknown_store(client):
    response = client.get(f"/api/stores/{ObjectId()}")

    assert response.status_code == 404


def test_rename_store(client, catalog, owner_headers):
    response = client.patch(f"/api/stores/{catalog['store_id']}", json={"name": "Renamed"}, headers=owner_headers)

    assert response.status_code == 200
    assert response.get_json()["name"] == "Renamed"


def test_rename_someone_elses_store(client, catalog, stranger_headers):
    response = client.patch(f"/api/stores/{catalog['store_id']}", json={"name": "Mine now"}, headers=stranger_headers)

    assert response.status_code == 403
    assert response.get_json()["message"] == "Unauthorized"


def test_delete_store_with_catalog_conflicts(client, catalog, owner_headers):
    response = client.delete(f"/api/stores/{catalog['store_id']}", headers=owner_headers)

    assert response.status_code == 409
    assert db.get_collection("stores").count_documents({}) == 1


def test_delete_empty_store(client, owner_headers):
    store_id = client.post("/api/stores", json={"name": "Empty"}, headers=owner_headers).get_json()["id"]

    response = client.delete(f"/api/stores/{store_id}", headers=owner_headers)

    assert response.status_code == 200
    assert response.get_json()["id"] == store_id
    assert client.get(f"/api/stores/{store_id}").status_code == 404
