# shop_admin/utils/extensions.py

import os
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address


RATE_LIMIT_STORAGE_URI = os.getenv("RATE_LIMIT_STORAGE_URI", "memory://")


def _log_breach(request_limit):
    # Imported lazily: rate_limits imports this module for `limiter`.
    from .rate_limits import log_rate_limit_breach
    log_rate_limit_breach(request_limit)


limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["2000 per day", "300 per hour"],
    storage_uri=RATE_LIMIT_STORAGE_URI,
    on_breach=_log_breach,
)
