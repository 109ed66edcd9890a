"""
API Blueprint - Public JSON endpoints
Handles: Contact form, testimonials, portfolio content, health
"""

from flask import Blueprint

api_bp = Blueprint('api', __name__, url_prefix='/api')

from . import routes
