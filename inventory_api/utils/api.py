# --- inventory_api/utils/api.py ---
from flask import jsonify, request

from ..errors import ValidationError


def json_body():
    """The request's JSON object; {} when there is no parsable body."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("request body must be a JSON object")
    return data


def ok(data, status_code=200):
    resp = jsonify(data)
    resp.status_code = status_code
    return resp


def err(message, status_code=400, **extra):
    resp = jsonify({"error": message, **extra})
    resp.status_code = status_code
    return resp
