"""
Utils Package - Centralized utility modules initialization
"""

from .decorators import admin_required
from .errors import (
    SubmissionError,
    ValidationError,
    TransportError,
    SubmissionRejected,
    PersistenceError,
    NotificationError,
    InvalidStatusError
)
from .validation import (
    clean_submission,
    validate_submission,
    is_valid_email,
    required_fields
)
from .store import SubmissionStore, get_store
from .notifications import SmtpNotifier, NullNotifier, build_notifier, get_notifier
from .submissions import submit_contact, submit_testimonial
from .security import (
    get_client_ip,
    get_admin_credentials,
    verify_password,
    load_admin_from_request
)
from .helpers import get_request_payload, json_error, track_visitor

__all__ = [
    # Decorators
    'admin_required',

    # Errors
    'SubmissionError',
    'ValidationError',
    'TransportError',
    'SubmissionRejected',
    'PersistenceError',
    'NotificationError',
    'InvalidStatusError',

    # Validation
    'clean_submission',
    'validate_submission',
    'is_valid_email',
    'required_fields',

    # Store
    'SubmissionStore',
    'get_store',

    # Notifications
    'SmtpNotifier',
    'NullNotifier',
    'build_notifier',
    'get_notifier',

    # Submissions
    'submit_contact',
    'submit_testimonial',

    # Security
    'get_client_ip',
    'get_admin_credentials',
    'verify_password',
    'load_admin_from_request',

    # Helpers
    'get_request_payload',
    'json_error',
    'track_visitor'
]
