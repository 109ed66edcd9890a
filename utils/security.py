"""
Security Module - Administrator credentials and request identity
"""

from flask import request, current_app
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash


class AdminUser(UserMixin):
    """The single site administrator, authenticated per request"""

    is_admin = True

    def __init__(self, username):
        self.id = username
        self.username = username


def get_admin_credentials():
    """Load admin credentials from configuration safely"""
    username = current_app.config.get('ADMIN_USERNAME')
    password = current_app.config.get('ADMIN_PASSWORD')
    if not username or not password:
        return {'username': None, 'password_hash': None}
    return {
        'username': username,
        'password_hash': generate_password_hash(password)
    }


def verify_password(password, password_hash):
    """Verify password against hash"""
    return check_password_hash(password_hash, password)


def load_admin_from_request(req):
    """Flask-Login request loader: HTTP Basic credentials of the administrator"""
    auth = req.authorization
    if not auth or not auth.username or auth.password is None:
        return None

    credentials = get_admin_credentials()
    if not credentials['username']:
        current_app.logger.warning("Admin credentials not configured, rejecting admin request")
        return None

    if auth.username == credentials['username'] and verify_password(auth.password, credentials['password_hash']):
        return AdminUser(auth.username)

    current_app.logger.warning(f"Failed admin login for '{auth.username}' from {get_client_ip()}")
    return None


def get_client_ip():
    """Get real client IP address"""
    forwarded = request.environ.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.environ.get('REMOTE_ADDR', 'unknown')


__all__ = [
    'AdminUser',
    'get_admin_credentials',
    'verify_password',
    'load_admin_from_request',
    'get_client_ip',
]
