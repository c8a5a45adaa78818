from ..constants.service_code import ERROR_MESSAGES
from .json_response import prepared_response
from .logger import Log


# Store access denied outside the route-level ownership checks
def handle_permission_error(error):
    return prepared_response(False, "FORBIDDEN", str(error) or ERROR_MESSAGES["UNAUTHORIZED"])

# marshmallow ValidationError not caught by a handler
def handle_validation_error(error):
    return prepared_response(False, "BAD_REQUEST", "Validation Error", errors=error.messages)

def handle_type_error(error):
    Log.error(f"[error_handlers.py][TypeError] {error}")
    return prepared_response(False, "BAD_REQUEST", str(error))

# A product update or delete would remove a variation an undelivered order uses
def handle_variation_in_use(error):
    Log.info(f"[error_handlers.py][VariationInUseError] variations={error.variation_ids}")
    return prepared_response(False, "BAD_REQUEST", error.message, code=error.code)

def handle_rate_limit(e):
    # e.description contains whatever was passed as error_message=
    return prepared_response(
        False,
        "TOO_MANY_REQUESTS",
        e.description or "Too many requests, please try again later.",
    )
