"""
Admin Routes - Administrative state changes and content management
All routes require the administrator's HTTP Basic credentials.
"""

from urllib.parse import urlparse
from flask import jsonify, current_app
from flask_login import current_user
from utils.decorators import admin_required
from utils.errors import InvalidStatusError, PersistenceError, ValidationError
from utils.helpers import get_request_payload, json_error
from utils.store import get_store
from . import admin_bp


def _optional_text(data, field):
    value = data.get(field)
    if isinstance(value, str):
        value = value.strip()
    return value or None


def _is_http_url(value):
    parsed = urlparse(value)
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)


def _clean_project(data):
    errors = {}
    title = _optional_text(data, 'title')
    if not isinstance(title, str):
        errors['title'] = 'Title is required'

    fields = {'title': title}
    for field in ('description', 'image_url', 'category', 'technologies', 'github_url', 'live_url'):
        value = _optional_text(data, field)
        if value is not None and not isinstance(value, str):
            errors[field] = f'{field} must be text'
        fields[field] = value

    for field in ('github_url', 'live_url'):
        if isinstance(fields[field], str) and not _is_http_url(fields[field]):
            errors[field] = 'Please provide a valid URL'

    stars = data.get('stars', 0) or 0
    if isinstance(stars, bool) or not isinstance(stars, int) or stars < 0:
        errors['stars'] = 'Stars must be a non-negative integer'
    fields['stars'] = stars

    if errors:
        raise ValidationError(errors)
    return fields


def _clean_skill(data):
    errors = {}
    name = _optional_text(data, 'name')
    if not isinstance(name, str):
        errors['name'] = 'Skill name is required'

    level = data.get('level')
    if isinstance(level, bool) or not isinstance(level, int) or not 0 <= level <= 100:
        errors['level'] = 'Level must be between 0 and 100'

    category = _optional_text(data, 'category')
    if category is not None and not isinstance(category, str):
        errors['category'] = 'category must be text'

    if errors:
        raise ValidationError(errors)
    return {'name': name, 'level': level, 'category': category}


@admin_bp.route('/contact/messages', methods=['GET'])
@admin_required
def contact_messages():
    """All contact messages, newest first"""
    try:
        messages = get_store().list_contact_messages()
    except PersistenceError:
        return json_error('Internal server error', 500)
    return jsonify([m.to_dict() for m in messages])


@admin_bp.route('/contact/messages/<message_id>/status', methods=['PUT'])
@admin_required
def update_message_status(message_id):
    """Move a contact message along pending -> read -> replied -> archived"""
    status = get_request_payload().get('status')
    if not isinstance(status, str):
        return json_error('Invalid status', 400)

    try:
        message = get_store().update_contact_status(message_id, status.strip().lower())
    except InvalidStatusError as e:
        return json_error(str(e), 400)
    except PersistenceError:
        return json_error('Internal server error', 500)

    if message is None:
        return json_error('Message not found', 404)

    current_app.logger.info(f"{current_user.username} set message {message_id} to '{message.status}'")
    return jsonify({'success': True, 'message': message.to_dict()})


@admin_bp.route('/testimonials', methods=['GET'])
@admin_required
def testimonials():
    """All testimonials, approved or not"""
    try:
        rows = get_store().list_testimonials()
    except PersistenceError:
        return json_error('Internal server error', 500)
    return jsonify([t.to_dict() for t in rows])


@admin_bp.route('/testimonials/<testimonial_id>/status', methods=['PUT'])
@admin_required
def update_testimonial_status(testimonial_id):
    """Approve or un-approve a testimonial"""
    is_approved = get_request_payload().get('is_approved')
    if not isinstance(is_approved, bool):
        return json_error('Invalid status. Use true for approved, false for pending.', 400)

    try:
        testimonial = get_store().set_testimonial_approval(testimonial_id, is_approved)
    except PersistenceError:
        return json_error('Internal server error', 500)

    if testimonial is None:
        return json_error('Testimonial not found', 404)

    current_app.logger.info(
        f"{current_user.username} set testimonial {testimonial_id} approved={testimonial.is_approved}")
    return jsonify({'success': True, 'testimonial': testimonial.to_dict()})


@admin_bp.route('/projects', methods=['POST'])
@admin_required
def add_project():
    try:
        fields = _clean_project(get_request_payload())
        project = get_store().add_project(fields)
    except ValidationError as e:
        return json_error('Validation failed', 400, errors=e.as_list())
    except PersistenceError:
        return json_error('Internal server error', 500)

    current_app.logger.info(f"Project saved to DB, project_id: {project.id}")
    return jsonify({'success': True, 'message': 'Project added successfully', 'projectId': project.id}), 201


@admin_bp.route('/skills', methods=['POST'])
@admin_required
def add_skill():
    try:
        fields = _clean_skill(get_request_payload())
        skill = get_store().add_skill(fields)
    except ValidationError as e:
        return json_error('Validation failed', 400, errors=e.as_list())
    except PersistenceError:
        return json_error('Internal server error', 500)

    current_app.logger.info(f"Skill saved to DB, skill_id: {skill.id}")
    return jsonify({'success': True, 'message': 'Skill added successfully', 'skillId': skill.id}), 201


@admin_bp.route('/analytics', methods=['GET'])
@admin_required
def analytics():
    try:
        stats = get_store().visitor_stats()
    except PersistenceError:
        return json_error('Internal server error', 500)
    return jsonify(stats)
