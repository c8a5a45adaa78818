from flask import jsonify
from ..constants.service_code import HTTP_STATUS_CODES
from .helpers import serialise_document


def prepared_response(status, status_code, message, data=None, errors=None, code=None):
    # Define mandatory fields that should always appear
    mandatory_fields = ["message", "status_code", "success"]

    all_fields = {
        "message": f"{message}",
        "status_code": HTTP_STATUS_CODES[status_code],
        "success": status,
        "code": code,
        "data": data,
        "errors": errors,
    }

    # Include mandatory fields and optional fields that have values
    response_data = {
        key: value for key, value in all_fields.items()
        if key in mandatory_fields or value is not None
    }

    return jsonify(response_data), HTTP_STATUS_CODES[status_code]


def entity_response(document, status_code="OK"):
    """Return a stored document (or list of documents) as the response body."""
    return jsonify(serialise_document(document)), HTTP_STATUS_CODES[status_code]