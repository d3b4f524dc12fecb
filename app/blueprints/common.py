"""
Blueprint helpers shared by the HTTP layer.
"""

from flask import request

from app.errors import ValidationError


def json_body() -> dict:
    """The request's JSON object; {} when there is no JSON body."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data
