"""
Decorators Module - Authorization decorators
"""

from functools import wraps
from flask import current_app
from flask_login import current_user


def admin_required(f):
    """Decorator to require the administrator (HTTP Basic, see utils.security)"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated or not getattr(current_user, 'is_admin', False):
            return current_app.login_manager.unauthorized()
        return f(*args, **kwargs)
    return decorated_function
