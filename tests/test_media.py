import io

import pytest

from shop_admin.config import Config
from shop_admin.resources.admin import admin_media_resource
from shop_admin.tasks import media_tasks
from shop_admin.utils.media import cloudinary_client


def test_upload_images(client, catalog, owner_headers, monkeypatch):
    uploaded = []

    def fake_upload(file_storage, folder, public_id=None):
        uploaded.append((file_storage.filename, folder))
        return {"url": f"https://cdn.example.com/{file_storage.filename}", "cloudinary_public_id": file_storage.filename}

    monkeypatch.setattr(admin_media_resource, "upload_image_file", fake_upload)

    response = client.post(
        f"/api/stores/{catalog['store_id']}/images",
        data={"images": [(io.BytesIO(b"fake"), "front.png"), (io.BytesIO(b"fake"), "back.jpg")]},
        content_type="multipart/form-data",
        headers=owner_headers,
    )

    assert response.status_code == 201
    assert [item["cloudinary_public_id"] for item in response.get_json()["data"]] == ["front.png", "back.jpg"]
    assert uploaded[0] == ("front.png", f"stores/{catalog['store_id']}")


def test_upload_rejects_other_file_types(client, catalog, owner_headers):
    response = client.post(
        f"/api/stores/{catalog['store_id']}/images",
        data={"images": (io.BytesIO(b"MZ"), "setup.exe")},
        content_type="multipart/form-data",
        headers=owner_headers,
    )

    assert response.status_code == 400


def test_delete_images_batches_by_hundred(monkeypatch):
    batches = []

    def fake_delete_resources(ids, resource_type):
        batches.append(list(ids))
        return {"deleted": {pid: "deleted" for pid in ids}}

    monkeypatch.setattr(cloudinary_client.cloudinary.api, "delete_resources", fake_delete_resources)

    deleted = cloudinary_client.delete_images([f"p{i}" for i in range(150)] + ["p0", ""])

    assert [len(batch) for batch in batches] == [100, 50]
    assert len(deleted) == 150


def test_cleanup_job_logs_and_reraises(monkeypatch):
    def boom(ids):
        raise RuntimeError("cloudinary down")

    monkeypatch.setattr(media_tasks, "delete_images", boom)

    with pytest.raises(RuntimeError):
        media_tasks.delete_cdn_images(["img1"], "[PRODUCT_PATCH]")


def test_enqueue_failure_is_swallowed(app):
    class BrokenQueue:
        def enqueue(self, *args, **kwargs):
            raise ConnectionError("redis down")

    app.queue = BrokenQueue()
    with app.app_context():
        assert media_tasks.enqueue_image_cleanup(["img1"], "[PRODUCT_PATCH]") is None


def test_enqueue_skips_empty_lists(app):
    with app.app_context():
        assert media_tasks.enqueue_image_cleanup([None, ""], "[PRODUCT_PATCH]") is None
    assert app.queue.calls == []


def test_cloudinary_credentials_come_from_config(monkeypatch):
    monkeypatch.setattr(Config, "CLOUDINARY_CLOUD_NAME", "demo-cloud")
    monkeypatch.setattr(Config, "CLOUDINARY_API_KEY", "key-123")

    cloudinary_client.init_cloudinary()

    settings = cloudinary_client.cloudinary.config()
    assert settings.cloud_name == "demo-cloud"
    assert settings.api_key == "key-123"
