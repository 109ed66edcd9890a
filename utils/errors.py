"""
Errors Module - Failure types of the submission pipeline
"""


class SubmissionError(Exception):
    """Base class for submission pipeline failures"""


class ValidationError(SubmissionError):
    """One or more fields failed validation; carries field -> message"""

    def __init__(self, errors):
        self.errors = dict(errors)
        super().__init__(f"Validation failed for: {', '.join(sorted(self.errors))}")

    def as_list(self):
        return [{'field': field, 'message': message} for field, message in self.errors.items()]


class TransportError(SubmissionError):
    """The API could not be reached or did not confirm the submission"""


class SubmissionRejected(TransportError):
    """The server answered and refused the submission (4xx or success: false)"""

    def __init__(self, message, status_code=None):
        self.status_code = status_code
        super().__init__(message)


class PersistenceError(SubmissionError):
    """The relational store rejected or could not perform a write"""


class NotificationError(SubmissionError):
    """A notification e-mail could not be sent"""


class InvalidStatusError(SubmissionError):
    """An administrative status update is not allowed"""


__all__ = [
    'SubmissionError',
    'ValidationError',
    'TransportError',
    'SubmissionRejected',
    'PersistenceError',
    'NotificationError',
    'InvalidStatusError',
]
