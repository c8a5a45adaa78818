from datetime import datetime

from bson import ObjectId
from bson.errors import InvalidId


def make_log_tag(file, resource, method, ip, user_id, store_id, **kwargs):
    # Base tag
    log_tag = (
        f"[{file}]"
        f"[{resource}]"
        f"[{method}]"
        f"[ip:{ip}]"
        f"[user:{user_id}]"
        f"[store:{store_id}]"
    )

    # Append extra context fields
    for key, value in kwargs.items():
        log_tag += f"[{key}:{value}]"

    return log_tag


def to_object_id(value):
    """
    Convert a string id to an ObjectId. Returns None when the value is empty
    or not a valid ObjectId, so callers can treat it as "not found".
    """
    if value is None or value == "":
        return None
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def serialise_document(value):
    """
    Recursively convert a Mongo document into JSON-safe primitives:
    ObjectId -> str, datetime -> ISO-8601, and `_id` exposed as `id`.
    """
    if isinstance(value, list):
        return [serialise_document(item) for item in value]

    if isinstance(value, dict):
        out = {}
        for key, item in value.items():
            if key == "_id":
                out["id"] = serialise_document(item)
                continue
            out[key] = serialise_document(item)
        return out

    if isinstance(value, ObjectId):
        return str(value)

    if isinstance(value, datetime):
        return value.isoformat()

    return value
