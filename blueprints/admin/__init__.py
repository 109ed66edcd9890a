"""
Admin Blueprint - Administrative JSON endpoints
Handles: Message status, testimonial approval, projects, skills, analytics
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__, url_prefix='/api/admin')

from . import routes
