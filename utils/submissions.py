"""
Submissions Module - Server side of the contact and testimonial pipeline

validate -> persist -> (contact only) notify, with the store and notifier
passed in by the caller.
"""

from flask import current_app
from .errors import NotificationError, ValidationError
from .validation import clean_submission, validate_submission


CONTACT_SUCCESS_MESSAGE = "Message sent successfully! I'll get back to you soon."
TESTIMONIAL_SUCCESS_MESSAGE = ('Thank you for your feedback! '
                               'Your testimonial has been submitted for approval.')


def _validated(kind, payload):
    fields = clean_submission(kind, payload)
    errors = validate_submission(kind, fields)
    if errors:
        current_app.logger.info(f"Rejected {kind} submission, invalid fields: {', '.join(errors)}")
        raise ValidationError(errors)
    return fields


def submit_contact(payload, store, notifier):
    """
    Accept a contact message.

    Raises:
        ValidationError: a field failed validation, nothing was stored
        PersistenceError: the row could not be written
    """
    fields = _validated('contact', payload)
    message = store.add_contact_message(fields)
    current_app.logger.info(f"Contact message saved to DB, message_id: {message.id}")

    # The row is already durable; a failed e-mail must not change the response
    try:
        notifier.notify_contact_message(message)
    except NotificationError as e:
        current_app.logger.warning(
            f"Email sending failed, but message {message.id} was saved to database: {str(e)}")
    except Exception as e:
        current_app.logger.exception(
            f"Unexpected notification error, message {message.id} was saved to database: {str(e)}")

    return {'success': True, 'message': CONTACT_SUCCESS_MESSAGE}


def submit_testimonial(payload, store):
    """Accept a testimonial; it always starts unapproved."""
    fields = _validated('testimonial', payload)
    testimonial = store.add_testimonial(fields)
    current_app.logger.info(f"Testimonial saved to DB, testimonial_id: {testimonial.id}")
    return {'success': True, 'message': TESTIMONIAL_SUCCESS_MESSAGE}


__all__ = ['submit_contact', 'submit_testimonial',
           'CONTACT_SUCCESS_MESSAGE', 'TESTIMONIAL_SUCCESS_MESSAGE']
