# shop_admin/utils/media/cloudinary_client.py
from typing import Dict, Any, Iterable, List

import cloudinary
import cloudinary.api
import cloudinary.uploader

from ...config import Config


def init_cloudinary():
    cloudinary.config(
        cloud_name=Config.CLOUDINARY_CLOUD_NAME,
        api_key=Config.CLOUDINARY_API_KEY,
        api_secret=Config.CLOUDINARY_API_SECRET,
        secure=True,
    )


def upload_image_file(file_storage, folder: str, public_id: str | None = None) -> dict:
    """
    Uploads a Werkzeug FileStorage image to Cloudinary and returns the
    `{url, cloudinary_public_id}` pair stored on product images.
    """
    init_cloudinary()

    options = {
        "folder": folder,
        "resource_type": "image",
        "overwrite": True,
        "secure": True,
    }
    if public_id:
        options["public_id"] = public_id

    result = cloudinary.uploader.upload(file_storage, **options)

    return {
        "url": result.get("secure_url"),
        "cloudinary_public_id": result.get("public_id"),
    }


def delete_images(public_ids: Iterable[str]) -> Dict[str, Any]:
    """
    Delete image assets by public id.

    Returns Cloudinary's `deleted` map (public_id -> "deleted" | "not_found").
    Raises whatever the SDK raises; callers running in the background log it.
    """
    ids: List[str] = [pid for pid in dict.fromkeys(public_ids) if pid]
    if not ids:
        return {}

    init_cloudinary()

    # The Admin API caps a single delete call at 100 public ids
    deleted: Dict[str, Any] = {}
    for start in range(0, len(ids), 100):
        result = cloudinary.api.delete_resources(ids[start:start + 100], resource_type="image")
        deleted.update(result.get("deleted") or {})
    return deleted
