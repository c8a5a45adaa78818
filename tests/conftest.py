"""Shared fixtures: an app on an in-memory Mongo, bearer tokens and seed data."""

import os
from datetime import datetime, timedelta, timezone

# Must be set before shop_admin configures its logger
os.environ.setdefault("APP_LOG_TO_FILE", "0")
os.environ.setdefault("APP_ENV", "testing")

import jwt
import mongomock
import pytest

from shop_admin import create_admin_app
from shop_admin.extensions.db import db
from shop_admin.models.order_model import Order, OrderItem


OWNER = "user_owner"
STRANGER = "user_stranger"
TEST_SECRET = "test-secret"


class RecordingQueue:
    """Stands in for the rq media queue and keeps every enqueued call."""

    class _Job:
        def __init__(self, job_id):
            self.id = job_id

    def __init__(self):
        self.calls = []

    def enqueue(self, func, *args, **kwargs):
        self.calls.append((func, args, kwargs))
        return self._Job(f"job-{len(self.calls)}")

    @property
    def public_ids(self):
        ids = []
        for _, args, _ in self.calls:
            ids.extend(args[0])
        return ids


def make_token(user_id, expires_in=timedelta(hours=1)):
    payload = {"sub": user_id, "exp": datetime.now(timezone.utc) + expires_in}
    return jwt.encode(payload, TEST_SECRET, algorithm="HS256")


def auth_headers(user_id=OWNER):
    return {"Authorization": f"Bearer {make_token(user_id)}"}


@pytest.fixture
def app():
    mongo_client = mongomock.MongoClient()
    app = create_admin_app("testing", mongo_client=mongo_client)
    app.queue = RecordingQueue()
    yield app
    mongo_client.drop_database(app.config["DB_NAME"])


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def queue(app):
    return app.queue


@pytest.fixture
def owner_headers():
    return auth_headers(OWNER)


@pytest.fixture
def stranger_headers():
    return auth_headers(STRANGER)


def image(public_id):
    return {
        "url": f"https://res.cloudinary.com/demo/image/upload/{public_id}.jpg",
        "cloudinary_public_id": public_id,
    }


@pytest.fixture
def catalog(app):
    """
    One store owned by OWNER with a billboard, a category, three sizes,
    one color and a product carrying two images and two variations.
    """
    stores = db.get_collection("stores")
    now = datetime.now()

    store_id = stores.insert_one({"name": "Main", "user_id": OWNER, "created_at": now, "updated_at": now}).inserted_id
    billboard_id = db.get_collection("billboards").insert_one(
        {"store_id": store_id, "label": "Summer", "image_url": "https://example.com/b.jpg", "created_at": now}
    ).inserted_id
    category_id = db.get_collection("categories").insert_one(
        {"store_id": store_id, "name": "Shirts", "billboard_id": billboard_id, "created_at": now}
    ).inserted_id

    sizes = db.get_collection("sizes")
    small = sizes.insert_one({"store_id": store_id, "name": "Small", "value": "S", "created_at": now}).inserted_id
    medium = sizes.insert_one({"store_id": store_id, "name": "Medium", "value": "M", "created_at": now}).inserted_id
    large = sizes.insert_one({"store_id": store_id, "name": "Large", "value": "L", "created_at": now}).inserted_id
    red = db.get_collection("colors").insert_one(
        {"store_id": store_id, "name": "Red", "value": "#ff0000", "created_at": now}
    ).inserted_id

    product_id = db.get_collection("products").insert_one({
        "store_id": store_id,
        "name": "Tee",
        "price": 20.0,
        "category_id": category_id,
        "is_featured": False,
        "is_archived": False,
        "created_at": now,
        "updated_at": now,
    }).inserted_id

    images = db.get_collection("images")
    for position, public_id in enumerate(["img1", "img2"]):
        images.insert_one({"product_id": product_id, "position": position, **image(public_id)})

    variations = db.get_collection("product_variations")
    v_small = variations.insert_one({
        "product_id": product_id, "store_id": store_id, "color_id": red, "size_id": small,
        "quantity": 3, "created_at": now,
    }).inserted_id
    v_medium = variations.insert_one({
        "product_id": product_id, "store_id": store_id, "color_id": red, "size_id": medium,
        "quantity": 4, "created_at": now + timedelta(seconds=1),
    }).inserted_id

    return {
        "store_id": str(store_id),
        "billboard_id": str(billboard_id),
        "category_id": str(category_id),
        "small": str(small),
        "medium": str(medium),
        "large": str(large),
        "red": str(red),
        "product_id": str(product_id),
        "v_small": str(v_small),
        "v_medium": str(v_medium),
    }


def place_order(catalog, variation_id, delivered=False, quantity=1):
    """Insert an order with one item for `variation_id`; returns the order id."""
    order = Order(
        store_id=catalog["store_id"],
        phone="0200000000",
        address="1 Main St",
        is_paid=True,
        delivered=delivered,
    ).save()
    OrderItem(
        order_id=order["_id"],
        product_variation_id=variation_id,
        quantity=quantity,
        product_id=catalog["product_id"],
    ).save()
    return str(order["_id"])
