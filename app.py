"""
Portfolio Site - Main Application Entry Point
Built using the Application Factory Pattern

This module initializes the Flask application with all necessary extensions,
configurations, and hooks. All actual route handling is delegated to blueprints.
"""

import os
from flask import Flask, request, jsonify
from werkzeug.exceptions import HTTPException
from config import get_config
from extensions import db, login_manager
from utils.notifications import build_notifier
from utils.security import load_admin_from_request
from utils.store import SubmissionStore

# Import all blueprints
from blueprints.api import api_bp
from blueprints.admin import admin_bp


def create_app(config_name=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional)

    Returns:
        Flask: Configured Flask application instance
    """

    app = Flask(__name__)

    # Load configuration
    conf = get_config(config_name)
    app.config.from_object(conf)

    # Fix PostgreSQL URL if needed
    db_url = app.config.get('SQLALCHEMY_DATABASE_URI')
    if db_url and db_url.startswith("postgres://"):
        app.config['SQLALCHEMY_DATABASE_URI'] = db_url.replace(
            "postgres://", "postgresql://", 1)

    # Initialize extensions with app
    initialize_extensions(app)

    # Store and notifier are handed to the routes through app.extensions
    app.extensions['submission_store'] = SubmissionStore(db.session)
    app.extensions['notifier'] = build_notifier(app.config)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    # Health check route
    @app.route('/health')
    def health_check():
        return {'status': 'ok', 'message': 'Portfolio application is running'}, 200

    return app


def initialize_extensions(app):
    """Initialize Flask extensions with the app instance"""
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.request_loader(load_admin_from_request)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'success': False, 'message': 'Authentication required'}), 401

    # Create tables if they don't exist
    with app.app_context():
        try:
            from sqlalchemy import text
            import models  # noqa: F401  registers the tables
            db.create_all()
            # Verify connection
            db.session.execute(text('SELECT 1'))
            app.logger.info("✓ Database initialized successfully")
        except Exception as e:
            app.logger.error(f"✗ Database initialization failed: {str(e)}")


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(api_bp)
    app.register_blueprint(admin_bp)


def register_error_handlers(app):
    """Register JSON error handlers"""

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({'success': False, 'message': e.description}), e.code

    @app.errorhandler(404)
    def page_not_found(e):
        return jsonify({'success': False, 'message': 'Not found'}), 404

    @app.errorhandler(413)
    def payload_too_large(e):
        return jsonify({'success': False, 'message': 'Request body is too large.'}), 413

    @app.errorhandler(Exception)
    def internal_server_error(e):
        app.logger.exception(f"Server Error: {str(e)}")
        body = {'success': False, 'message': 'Something went wrong!'}
        if app.debug:
            body['error'] = str(e)
        return jsonify(body), 500


def register_hooks(app):
    """Register request hooks"""

    @app.before_request
    def log_api_visit():
        """Record every public API call for the analytics endpoint"""
        if request.path.startswith('/api/') and not request.path.startswith('/api/admin/'):
            from utils.helpers import track_visitor
            track_visitor()


if __name__ == '__main__':
    # Get environment
    env = os.environ.get('FLASK_ENV', 'development')

    # Create app
    app = create_app(env)

    # Run development server
    app.run(
        host='0.0.0.0',
        port=int(os.environ.get('PORT', 3000)),
        debug=(env == 'development')
    )
