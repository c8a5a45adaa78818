# shop_admin/utils/rate_limits.py

from flask import request, g, has_request_context
from flask_limiter.util import get_remote_address

from ..utils.extensions import limiter
from ..utils.logger import Log


# ---------- KEY FUNCTIONS ----------

def _get_client_ip():
    """Safely get client IP, returns 'unknown' if outside request context."""
    if has_request_context():
        return get_remote_address() or "unknown"
    return "unknown"


def user_key_func():
    """
    Rate-limit per authenticated user (set by token_required), falling back
    to the remote address for anonymous reads.
    """
    user = g.get("current_user") or {}
    user_id = user.get("user_id")
    if user_id is not None:
        return f"user:{user_id}"
    return get_remote_address()


# ---------- RATE LIMIT BREACH HANDLER ----------

def log_rate_limit_breach(request_limit):
    """Called by Flask-Limiter whenever a limit is exceeded."""
    client_ip = _get_client_ip()
    user = g.get("current_user") or {}
    user_id = user.get("user_id") or "anonymous"
    endpoint = request.endpoint or "unknown"

    Log.warning(
        f"[rate_limits.py][RATE_LIMIT_BREACH][{client_ip}] "
        f"user={user_id}, limit={request_limit}, method={request.method}, "
        f"path={request.path}, endpoint={endpoint}"
    )


# ---------- GENERIC CRUD HELPERS FOR STORE ENTITIES ----------

def crud_read_limiter(
    entity_name: str,
    limit_str: str = "120 per minute",
    scope: str | None = None,
):
    """
    Generic limiter for READ (GET) operations on store entities.

    Example:
        @crud_read_limiter("category")
    """
    scope = scope or f"{entity_name}-read"
    error_message = f"Too many {entity_name} read requests. Please slow down."

    return limiter.shared_limit(
        limit_str,
        scope=scope,
        key_func=user_key_func,
        methods=["GET"],
        error_message=error_message,
    )


def crud_write_limiter(
    entity_name: str,
    limit_str: str = "30 per minute; 300 per hour",
    scope: str | None = None,
):
    """Generic limiter for WRITE (POST/PUT/PATCH) operations on store entities."""
    scope = scope or f"{entity_name}-write"
    error_message = f"Too many {entity_name} write requests. Please try again later."

    return limiter.shared_limit(
        limit_str,
        scope=scope,
        key_func=user_key_func,
        methods=["POST", "PUT", "PATCH"],
        error_message=error_message,
    )


def crud_delete_limiter(
    entity_name: str,
    limit_str: str = "10 per minute; 100 per hour",
    scope: str | None = None,
):
    """Generic limiter for DELETE operations on store entities."""
    scope = scope or f"{entity_name}-delete"
    error_message = f"Too many {entity_name} delete requests. Please try again later."

    return limiter.shared_limit(
        limit_str,
        scope=scope,
        key_func=user_key_func,
        methods=["DELETE"],
        error_message=error_message,
    )
