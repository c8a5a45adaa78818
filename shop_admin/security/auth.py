from functools import wraps

import jwt
from flask import current_app, g, request
from flask_smorest import abort

from ..constants.service_code import AUTHENTICATION_MESSAGES
from ..utils.logger import Log


def decode_access_token(token):
    """
    Verify a bearer token issued by the identity provider and return its claims.
    The user id is read from `sub`, falling back to `user_id`.
    """
    return jwt.decode(
        token,
        current_app.config["AUTH_JWT_SECRET"],
        algorithms=[current_app.config.get("AUTH_JWT_ALGORITHM", "HS256")],
        options={"require": ["exp"]},
    )


def token_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        auth_header = request.headers.get('Authorization')
        log_tag = f"[auth.py][token_required][{request.remote_addr}]"

        if not auth_header or not auth_header.startswith("Bearer "):
            abort(401, message=AUTHENTICATION_MESSAGES["AUTHENTICATION_REQUIRED"])

        token = auth_header[len("Bearer "):].strip()
        if not token:
            abort(401, message=AUTHENTICATION_MESSAGES["AUTHENTICATION_REQUIRED"])

        try:
            claims = decode_access_token(token)
        except jwt.ExpiredSignatureError:
            Log.info(f"{log_tag} expired token")
            abort(401, message=AUTHENTICATION_MESSAGES["TOKEN_EXPIRED"])
        except jwt.InvalidTokenError as e:
            Log.info(f"{log_tag} invalid token: {e}")
            abort(401, message=AUTHENTICATION_MESSAGES["INVALID_TOKEN"])

        user_id = claims.get("sub") or claims.get("user_id")
        if not user_id:
            abort(401, message=AUTHENTICATION_MESSAGES["INVALID_TOKEN"])

        g.current_user = {"user_id": str(user_id)}
        return f(*args, **kwargs)
    return decorated


def current_user_id():
    return (g.get("current_user") or {}).get("user_id")


def get_owned_store(store_id):
    """
    Return the store only if it belongs to the authenticated user.
    Route handlers answer 403 when this is None.
    """
    from ..models.store_model import Store

    user_id = current_user_id()
    if not user_id:
        return None
    return Store.get_by_id_and_user(store_id, user_id)
