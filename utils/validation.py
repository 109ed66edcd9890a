"""
Validation Module - Shared submission rules

The same rule set is used by the API endpoints and by the submission client,
so both sides reject exactly the same drafts.
"""

import re
from collections import namedtuple


EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

FieldRule = namedtuple('FieldRule', ['field', 'label', 'min_length', 'max_length', 'email', 'single_line'])

LINE_BREAK = re.compile(r'[\r\n]')


class UnknownSubmissionKind(KeyError):
    """Raised when a submission kind has no rule set"""


RULES = {
    'contact': (
        FieldRule('name', 'Name', 2, 100, False, True),
        FieldRule('email', 'Email', None, 150, True, False),
        FieldRule('subject', 'Subject', 5, 200, False, True),
        FieldRule('message', 'Message', 10, 5000, False, False),
    ),
    'testimonial': (
        FieldRule('name', 'Name', 2, 100, False, True),
        FieldRule('email', 'Email', None, 150, True, False),
        FieldRule('message', 'Testimonial', 20, 5000, False, False),
    ),
}


def get_rules(kind):
    try:
        return RULES[kind]
    except KeyError:
        raise UnknownSubmissionKind(kind) from None


def required_fields(kind):
    """Field names a submission of this kind must carry"""
    return tuple(rule.field for rule in get_rules(kind))


def is_valid_email(value):
    return isinstance(value, str) and bool(EMAIL_PATTERN.match(value))


def clean_submission(kind, data):
    """
    Keep only the fields known for the kind, stripped of surrounding whitespace.

    Missing, null and non-string values become empty strings so they fail
    the "required" rule instead of reaching the store.
    """
    data = data if isinstance(data, dict) else {}
    cleaned = {}
    for field in required_fields(kind):
        value = data.get(field)
        cleaned[field] = value.strip() if isinstance(value, str) else ''
    return cleaned


def _check_field(rule, value):
    if not value:
        return f'{rule.label} is required'
    if rule.min_length and len(value) < rule.min_length:
        return f'{rule.label} must be at least {rule.min_length} characters'
    if rule.max_length and len(value) > rule.max_length:
        return f'{rule.label} must be at most {rule.max_length} characters'
    # Name and subject end up in e-mail headers
    if rule.single_line and LINE_BREAK.search(value):
        return f'{rule.label} must be a single line'
    if rule.email and not is_valid_email(value):
        return 'Please enter a valid email address'
    return None


def validate_submission(kind, data):
    """
    Validate a submission draft.

    Args:
        kind (str): 'contact' or 'testimonial'
        data (dict): Field values, already cleaned or raw

    Returns:
        dict: field name -> error message, empty when the draft is valid
    """
    cleaned = clean_submission(kind, data)
    errors = {}
    for rule in get_rules(kind):
        error = _check_field(rule, cleaned[rule.field])
        if error:
            errors[rule.field] = error
    return errors


__all__ = [
    'FieldRule',
    'RULES',
    'UnknownSubmissionKind',
    'clean_submission',
    'get_rules',
    'is_valid_email',
    'required_fields',
    'validate_submission',
]
