import logging

from bson import ObjectId
from pymongo.errors import PyMongoError

from conftest import image, place_order
from shop_admin.extensions.db import db
from shop_admin.models.product_model import Product, ProductImage
from shop_admin.tasks.media_tasks import delete_cdn_images


def product_url(catalog, product_id=None):
    return f"/api/stores/{catalog['store_id']}/products/{product_id or catalog['product_id']}"


def product_payload(catalog, variations, images=None, **overrides):
    data = {
        "name": "Tee",
        "price": 25.5,
        "category_id": catalog["category_id"],
        "is_featured": True,
        "is_archived": False,
        "images": images or [image("img1"), image("img3")],
        "product_variations": variations,
    }
    data.update(overrides)
    return data


def keep_small_add_large(catalog):
    return [
        {"id": catalog["v_small"], "color_id": catalog["red"], "size_id": catalog["small"], "quantity": 10},
        {"color_id": catalog["red"], "size_id": catalog["large"], "quantity": 2},
    ]


def variation_docs(catalog):
    return {
        str(v["_id"]): v
        for v in db.get_collection("product_variations").find({})
    }


def test_get_product_with_relations(client, catalog):
    response = client.get(product_url(catalog))

    assert response.status_code == 200
    body = response.get_json()
    assert body["category"]["name"] == "Shirts"
    assert [i["cloudinary_public_id"] for i in body["images"]] == ["img1", "img2"]
    assert body["product_variations"][0]["size"]["value"] == "S"
    assert body["product_variations"][0]["color"]["value"] == "#ff0000"


def test_list_products_filters(client, catalog):
    url = f"/api/stores/{catalog['store_id']}/products"

    assert len(client.get(url).get_json()) == 1
    assert client.get(url, query_string={"size_id": catalog["large"]}).get_json() == []
    assert len(client.get(url, query_string={"size_id": catalog["small"]}).get_json()) == 1
    assert client.get(url, query_string={"is_featured": "true"}).get_json() == []


def test_create_product(client, catalog, owner_headers):
    url = f"/api/stores/{catalog['store_id']}/products"
    payload = product_payload(catalog, [{"color_id": catalog["red"], "size_id": catalog["large"]}], name="Hoodie")

    response = client.post(url, json=payload, headers=owner_headers)

    assert response.status_code == 200
    body = response.get_json()
    assert body["name"] == "Hoodie"
    assert len(body["images"]) == 2
    assert body["product_variations"][0]["quantity"] == 0


def test_create_product_rejects_duplicate_variations(client, catalog, owner_headers):
    url = f"/api/stores/{catalog['store_id']}/products"
    pair = {"color_id": catalog["red"], "size_id": catalog["large"]}

    response = client.post(url, json=product_payload(catalog, [pair, dict(pair)]), headers=owner_headers)

    assert response.status_code == 400


def test_patch_updates_creates_and_deletes_variations(client, catalog, owner_headers, queue):
    body = {"product_data": product_payload(catalog, keep_small_add_large(catalog)), "deleted_images": [image("img2")]}

    response = client.patch(product_url(catalog), json=body, headers=owner_headers)

    assert response.status_code == 200
    product = response.get_json()
    assert product["price"] == 25.5
    assert product["is_featured"] is True
    assert [i["cloudinary_public_id"] for i in product["images"]] == ["img1", "img3"]

    variations = variation_docs(catalog)
    assert catalog["v_medium"] not in variations
    assert variations[catalog["v_small"]]["quantity"] == 10
    assert {str(v["size_id"]) for v in variations.values()} == {catalog["small"], catalog["large"]}

    assert queue.public_ids == ["img2"]
    func, args, _ = queue.calls[0]
    assert func is delete_cdn_images
    assert args[1] == "[PRODUCT_PATCH]"


def test_patch_disconnects_variation_used_by_delivered_order(client, catalog, owner_headers):
    place_order(catalog, catalog["v_medium"], delivered=True)
    body = {"product_data": product_payload(catalog, keep_small_add_large(catalog))}

    response = client.patch(product_url(catalog), json=body, headers=owner_headers)

    assert response.status_code == 200
    variations = variation_docs(catalog)
    assert variations[catalog["v_medium"]]["product_id"] is None
    assert len(response.get_json()["product_variations"]) == 2


def test_patch_rejects_removing_variation_of_undelivered_order(client, catalog, owner_headers, queue):
    place_order(catalog, catalog["v_medium"], delivered=False)
    before = variation_docs(catalog)
    body = {"product_data": product_payload(catalog, keep_small_add_large(catalog)), "deleted_images": [image("img2")]}

    response = client.patch(product_url(catalog), json=body, headers=owner_headers)

    assert response.status_code == 400
    assert response.get_json()["code"] == "P2014"
    assert response.get_json()["message"] == "Product Variation cannot be deleted because it is used in an order"

    assert variation_docs(catalog) == before
    images = [i["cloudinary_public_id"] for i in db.get_collection("images").find({})]
    assert sorted(images) == ["img1", "img2"]
    assert db.get_collection("products").find_one({})["price"] == 20.0
    assert queue.calls == []


def test_patch_validates_before_checking_ownership(client, catalog, stranger_headers):
    response = client.patch(product_url(catalog), json={"product_data": {"name": "x"}}, headers=stranger_headers)

    assert response.status_code == 400
    assert response.get_json()["message"] == "Invalid Product data"


def test_patch_in_someone_elses_store(client, catalog, stranger_headers):
    body = {"product_data": product_payload(catalog, keep_small_add_large(catalog))}

    response = client.patch(product_url(catalog), json=body, headers=stranger_headers)

    assert response.status_code == 403


def test_patch_unknown_product(client, catalog, owner_headers):
    missing = str(ObjectId())
    body = {"product_data": product_payload(catalog, keep_small_add_large(catalog))}

    response = client.patch(product_url(catalog, missing), json=body, headers=owner_headers)

    assert response.status_code == 404
    assert response.get_json()["message"] == f"Product with ID {missing} not found"


def test_patch_with_category_of_another_store(client, catalog, owner_headers):
    body = {"product_data": product_payload(catalog, keep_small_add_large(catalog), category_id=str(ObjectId()))}

    response = client.patch(product_url(catalog), json=body, headers=owner_headers)

    assert response.status_code == 400
    assert "category_id" in response.get_json()["errors"]


def test_delete_product(client, catalog, owner_headers, queue):
    response = client.delete(product_url(catalog), headers=owner_headers)

    assert response.status_code == 200
    assert db.get_collection("products").count_documents({}) == 0
    assert db.get_collection("images").count_documents({}) == 0
    assert db.get_collection("product_variations").count_documents({}) == 0
    assert sorted(queue.public_ids) == ["img1", "img2"]


def test_delete_product_keeps_variations_of_delivered_orders(client, catalog, owner_headers):
    place_order(catalog, catalog["v_small"], delivered=True)

    response = client.delete(product_url(catalog), headers=owner_headers)

    assert response.status_code == 200
    remaining = list(db.get_collection("product_variations").find({}))
    assert [str(v["_id"]) for v in remaining] == [catalog["v_small"]]
    assert remaining[0]["product_id"] is None


def test_delete_product_blocked_by_undelivered_order(client, catalog, owner_headers, queue):
    place_order(catalog, catalog["v_small"], delivered=False)

    response = client.delete(product_url(catalog), headers=owner_headers)

    assert response.status_code == 400
    assert response.get_json()["code"] == "P2014"
    assert db.get_collection("products").count_documents({}) == 1
    assert queue.calls == []


def fail_with_mongo_error(*args, **kwargs):
    raise PyMongoError("write failed")


def test_failed_patch_writes_nothing_and_queues_nothing(client, catalog, owner_headers, queue, monkeypatch, caplog):
    monkeypatch.setattr(ProductImage, "replace_for_product", fail_with_mongo_error)
    before = variation_docs(catalog)
    body = {"product_data": product_payload(catalog, keep_small_add_large(catalog)), "deleted_images": [image("img2")]}

    with caplog.at_level(logging.ERROR, logger="shop_admin"):
        response = client.patch(product_url(catalog), json=body, headers=owner_headers)

    assert response.status_code == 500
    assert response.get_json()["message"] == "Internal error"
    assert "[PRODUCT_PATCH]" in caplog.text

    assert queue.calls == []
    assert variation_docs(catalog) == before
    images = [i["cloudinary_public_id"] for i in db.get_collection("images").find({})]
    assert sorted(images) == ["img1", "img2"]
    assert db.get_collection("products").find_one({})["price"] == 20.0


def test_failed_delete_keeps_product_and_queues_nothing(client, catalog, owner_headers, queue, monkeypatch, caplog):
    monkeypatch.setattr(Product, "delete", fail_with_mongo_error)

    with caplog.at_level(logging.ERROR, logger="shop_admin"):
        response = client.delete(product_url(catalog), headers=owner_headers)

    assert response.status_code == 500
    assert "[PRODUCT_DELETE]" in caplog.text
    assert queue.calls == []
    assert db.get_collection("images").count_documents({}) == 2
    assert db.get_collection("product_variations").count_documents({}) == 2


def test_image_replacement_swaps_records(app, catalog):
    product_id = ObjectId(catalog["product_id"])

    ProductImage.replace_for_product(product_id, [image("img3")])

    assert [i["cloudinary_public_id"] for i in ProductImage.get_by_product_id(product_id)] == ["img3"]


def test_archived_products_are_hidden_by_default(client, catalog):
    db.get_collection("products").update_one({}, {"$set": {"is_archived": True}})
    url = f"/api/stores/{catalog['store_id']}/products"

    assert client.get(url).get_json() == []
    listed = client.get(url, query_string={"include_archived": "true"}).get_json()
    assert [p["name"] for p in listed] == ["Tee"]


def test_list_products_by_category_and_color(client, catalog):
    url = f"/api/stores/{catalog['store_id']}/products"

    assert len(client.get(url, query_string={"category_id": catalog["category_id"]}).get_json()) == 1
    assert client.get(url, query_string={"category_id": str(ObjectId())}).get_json() == []
    assert len(client.get(url, query_string={"color_id": catalog["red"]}).get_json()) == 1
    assert client.get(url, query_string={"color_id": str(ObjectId())}).get_json() == []
