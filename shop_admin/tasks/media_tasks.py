# shop_admin/tasks/media_tasks.py
"""
Background removal of product images from Cloudinary.

Jobs run on the rq queue configured by MEDIA_QUEUE_NAME:

    python -m shop_admin.workers.media_worker
"""
from flask import current_app

from ..utils.logger import Log
from ..utils.media.cloudinary_client import delete_images


def delete_cdn_images(public_ids, log_tag="[media_tasks.py]"):
    """rq job: delete the assets and log anything Cloudinary did not delete."""
    try:
        deleted = delete_images(public_ids)
    except Exception as e:
        Log.error(f"{log_tag}: Unsuccessful Image Deletion {e}")
        raise

    failed = [pid for pid, status in deleted.items() if status != "deleted"]
    if failed:
        Log.warning(f"{log_tag}: Unsuccessful Image Deletion for {failed}")
    else:
        Log.info(f"{log_tag}: deleted {len(deleted)} image(s)")
    return deleted


def enqueue_image_cleanup(public_ids, log_tag):
    """
    Schedule CDN deletion without blocking the request. A queue failure is
    logged and swallowed: the database change has already been decided.
    """
    ids = [pid for pid in public_ids if pid]
    if not ids:
        return None

    queue = getattr(current_app, "queue", None)
    if queue is None:
        Log.error(f"{log_tag}: media queue not configured, skipping deletion of {len(ids)} image(s)")
        return None

    try:
        job = queue.enqueue(delete_cdn_images, ids, log_tag)
        Log.info(f"{log_tag}: queued deletion of {len(ids)} image(s) job={job.id}")
        return job
    except Exception as e:
        Log.error(f"{log_tag}: Unsuccessful Image Deletion (enqueue failed) {e}")
        return None
