import pytest

from utils.validation import (
    UnknownSubmissionKind,
    clean_submission,
    is_valid_email,
    validate_submission,
)


@pytest.mark.parametrize("email, expected", [
    ("a@b.co", True),
    ("jo@x.com", True),
    ("not-an-email", False),
    ("a@b", False),
    ("a b@c.de", False),
    ("a@@b.co", False),
    ("", False),
])
def test_email_format(email, expected):
    assert is_valid_email(email) is expected


def test_valid_contact_has_no_errors(valid_contact):
    assert validate_submission('contact', valid_contact) == {}


def test_short_name_is_rejected(valid_contact):
    errors = validate_submission('contact', dict(valid_contact, name='J'))
    assert errors == {'name': 'Name must be at least 2 characters'}


def test_empty_contact_names_every_field():
    errors = validate_submission('contact', {})
    assert errors == {
        'name': 'Name is required',
        'email': 'Email is required',
        'subject': 'Subject is required',
        'message': 'Message is required',
    }


def test_contact_minimum_lengths():
    errors = validate_submission('contact', {
        'name': 'Al',
        'email': 'al@example.com',
        'subject': 'Hey',
        'message': 'Too short',
    })
    assert errors == {
        'subject': 'Subject must be at least 5 characters',
        'message': 'Message must be at least 10 characters',
    }


def test_testimonial_needs_twenty_characters(valid_testimonial):
    errors = validate_submission('testimonial', dict(valid_testimonial, message='x' * 19))
    assert errors == {'message': 'Testimonial must be at least 20 characters'}
    assert validate_submission('testimonial', dict(valid_testimonial, message='x' * 20)) == {}


def test_testimonial_has_no_subject_rule(valid_testimonial):
    assert 'subject' not in validate_submission('testimonial', {})
    assert validate_submission('testimonial', valid_testimonial) == {}


def test_whitespace_and_non_strings_count_as_empty(valid_contact):
    errors = validate_submission('contact', dict(valid_contact, name='   ', subject=12345, message=None))
    assert errors['name'] == 'Name is required'
    assert errors['subject'] == 'Subject is required'
    assert errors['message'] == 'Message is required'


def test_length_is_measured_after_stripping(valid_contact):
    errors = validate_submission('contact', dict(valid_contact, name='  J  '))
    assert errors == {'name': 'Name must be at least 2 characters'}


def test_maximum_lengths(valid_contact):
    errors = validate_submission('contact', dict(valid_contact, name='n' * 101, subject='s' * 201))
    assert errors == {
        'name': 'Name must be at most 100 characters',
        'subject': 'Subject must be at most 200 characters',
    }


def test_bad_email_message(valid_contact):
    errors = validate_submission('contact', dict(valid_contact, email='a@b'))
    assert errors == {'email': 'Please enter a valid email address'}


def test_clean_submission_keeps_only_known_fields():
    cleaned = clean_submission('testimonial', {
        'name': ' Jane ',
        'email': 'jane@example.com ',
        'message': ' hi ',
        'is_approved': True,
    })
    assert cleaned == {'name': 'Jane', 'email': 'jane@example.com', 'message': 'hi'}


def test_clean_submission_tolerates_non_dict():
    assert clean_submission('contact', ['not', 'a', 'dict']) == {
        'name': '', 'email': '', 'subject': '', 'message': '',
    }


def test_unknown_kind():
    with pytest.raises(UnknownSubmissionKind):
        validate_submission('newsletter', {})
    with pytest.raises(KeyError):
        validate_submission('newsletter', {})


@pytest.mark.parametrize("field", ["name", "subject"])
@pytest.mark.parametrize("breaker", ["\n", "\r", "\r\n"])
def test_header_fields_must_be_single_line(valid_contact, field, breaker):
    value = f"{valid_contact[field]}{breaker}Bcc: victim@example.com"
    errors = validate_submission('contact', dict(valid_contact, **{field: value}))
    label = field.capitalize()
    assert errors == {field: f'{label} must be a single line'}


def test_message_body_may_span_lines(valid_contact, valid_testimonial):
    assert validate_submission('contact', dict(valid_contact, message='First line\nsecond line')) == {}
    assert validate_submission('testimonial', dict(
        valid_testimonial, name='Jane\nSmith')) == {'name': 'Name must be a single line'}
