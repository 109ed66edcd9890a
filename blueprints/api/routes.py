"""
API Routes - Public submission and content endpoints
"""

import time
from datetime import datetime, timezone
from flask import jsonify, current_app
from utils.errors import PersistenceError, ValidationError
from utils.helpers import get_request_payload, json_error
from utils.notifications import get_notifier
from utils.store import get_store
from utils.submissions import submit_contact, submit_testimonial
from . import api_bp


PROCESS_STARTED = time.monotonic()

CONTACT_FAILURE_MESSAGE = 'Sorry, there was an error sending your message. Please try again.'
TESTIMONIAL_FAILURE_MESSAGE = 'Sorry, there was an error submitting your testimonial. Please try again.'


@api_bp.route('/contact', methods=['POST'])
def contact():
    """Contact form endpoint - saves to database, then tries to e-mail the owner"""
    payload = get_request_payload()
    try:
        result = submit_contact(payload, get_store(), get_notifier())
    except ValidationError as e:
        return json_error('Validation failed', 400, errors=e.as_list())
    except PersistenceError:
        return json_error(CONTACT_FAILURE_MESSAGE, 500)
    return jsonify(result)


@api_bp.route('/testimonials', methods=['GET'])
def list_testimonials():
    """Approved testimonials for public display"""
    try:
        testimonials = get_store().list_testimonials(approved_only=True)
    except PersistenceError:
        return json_error('Internal server error', 500)
    return jsonify([t.to_dict() for t in testimonials])


@api_bp.route('/testimonials', methods=['POST'])
def add_testimonial():
    """Testimonial form endpoint - stored unapproved until the admin approves it"""
    payload = get_request_payload()
    try:
        result = submit_testimonial(payload, get_store())
    except ValidationError as e:
        return json_error('Validation failed', 400, errors=e.as_list())
    except PersistenceError:
        return json_error(TESTIMONIAL_FAILURE_MESSAGE, 500)
    return jsonify(result)


@api_bp.route('/projects', methods=['GET'])
def list_projects():
    try:
        projects = get_store().list_projects()
    except PersistenceError:
        return json_error('Internal server error', 500)
    return jsonify([p.to_dict() for p in projects])


@api_bp.route('/skills', methods=['GET'])
def list_skills():
    try:
        skills = get_store().list_skills()
    except PersistenceError:
        return json_error('Internal server error', 500)
    return jsonify([s.to_dict() for s in skills])


@api_bp.route('/health')
def health():
    return jsonify({
        'status': 'ok',
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'uptime': round(time.monotonic() - PROCESS_STARTED, 3),
        'environment': 'testing' if current_app.testing else ('development' if current_app.debug else 'production')
    })
