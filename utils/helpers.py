"""
Helpers Module - Utility functions for request handling
"""

from flask import current_app, jsonify, request
from .errors import PersistenceError
from .security import get_client_ip
from .store import get_store


def get_request_payload():
    """
    Body of the current request as a dict.

    JSON objects and form posts are accepted; anything else reads as empty,
    which makes every required field fail validation.
    """
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    if request.form:
        return request.form.to_dict()
    return {}


def json_error(message, status, **extra):
    body = {'success': False, 'message': message}
    body.update(extra)
    return jsonify(body), status


def track_visitor():
    """Record the current API request; never fails the request"""
    try:
        get_store().log_visit(
            get_client_ip(),
            request.headers.get('User-Agent', 'Unknown')[:500],
            request.path,
        )
    except PersistenceError as e:
        current_app.logger.error(f"Error logging visitor: {str(e)}")
