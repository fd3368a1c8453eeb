"""
Portfolio API - Main Application Entry Point
Built using the Application Factory Pattern for modular architecture

This module initializes the Flask application with all necessary extensions,
configurations, and middleware. All actual route handling is delegated to blueprints.
"""

import logging
import os
import sys
import time
import click
from flask import Flask, jsonify, request, g
from sqlalchemy import text
from werkzeug.exceptions import HTTPException, BadRequest
from werkzeug.middleware.proxy_fix import ProxyFix
from config import get_config
from extensions import db, cors
from utils.validation import ValidationError
from utils.security import check_rate_limit, apply_security_headers

# Import all blueprints
from blueprints.pages import pages_bp
from blueprints.projects import projects_bp
from blueprints.experience import experience_bp
from blueprints.achievements import achievements_bp
from blueprints.contact import contact_bp


LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def create_app(config_name=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional,
            defaults to FLASK_ENV)

    Returns:
        Flask: Configured Flask application instance
    """

    app = Flask(__name__)

    # Load configuration
    conf = get_config(config_name)
    app.config.from_object(conf)
    app.config['ENV_NAME'] = config_name or os.environ.get('FLASK_ENV', 'development')

    configure_logging(app)

    # Keep field order as serialized and allow non-ASCII names
    app.json.sort_keys = False
    app.json.ensure_ascii = False

    # Trust the reverse proxy for client IP and scheme
    hops = app.config.get('TRUST_PROXY', 1)
    if hops:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops)

    # Initialize extensions with app
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    # Register CLI commands
    register_commands(app)

    return app


def configure_logging(app):
    """Send app logs to stderr with a single formatter"""
    app.logger.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    app.logger.addHandler(handler)
    app.logger.setLevel(getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))
    app.logger.propagate = False

    # Werkzeug's own access log duplicates ours
    if app.config.get('ACCESS_LOG'):
        logging.getLogger('werkzeug').setLevel(logging.WARNING)


def initialize_extensions(app):
    """Initialize Flask extensions with the app instance"""
    db.init_app(app)
    cors.init_app(app, origins=app.config.get('CORS_ORIGINS', []))

    # Create tables if they don't exist
    with app.app_context():
        try:
            import models  # noqa: F401  (registers tables on the metadata)
            db.create_all()
            # Verify connection
            db.session.execute(text('SELECT 1'))
            app.logger.info("✓ Database initialized successfully")
        except Exception as e:
            app.logger.error(f"✗ Database initialization failed: {str(e)}")


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(pages_bp)
    app.register_blueprint(projects_bp)
    app.register_blueprint(experience_bp)
    app.register_blueprint(achievements_bp)
    app.register_blueprint(contact_bp)


def register_error_handlers(app):
    """Register JSON error handlers; every error body is {"error": message}"""

    @app.errorhandler(ValidationError)
    def validation_error(e):
        db.session.rollback()
        app.logger.info(f"Validation failed on {request.path}: {e.message}")
        return jsonify({'error': e.message}), 400

    @app.errorhandler(400)
    def bad_request(e):
        message = e.description if e.description != BadRequest.description else 'Bad request'
        return jsonify({'error': message}), 400

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(413)
    def payload_too_large(e):
        return jsonify({'error': 'Request body too large'}), 413

    @app.errorhandler(429)
    def rate_limit_exceeded(e):
        return jsonify({'error': 'Too many requests, please try again later.'}), 429

    @app.errorhandler(Exception)
    def handle_exception(e):
        """Handle unexpected exceptions"""
        if isinstance(e, HTTPException):
            return jsonify({'error': e.description or e.name}), e.code
        db.session.rollback()
        app.logger.error(f"Unhandled exception on {request.method} {request.path}: {e}", exc_info=True)
        return jsonify({'error': 'Server error'}), 500


def register_hooks(app):
    """Register request/response hooks"""

    @app.before_request
    def before_request():
        g.request_started = time.perf_counter()
        if request.method == 'OPTIONS':
            return None
        max_requests, window = app.config['RATELIMIT_GENERAL']
        if not check_rate_limit('general', max_requests, window):
            app.logger.warning(f"General rate limit exceeded for {request.remote_addr}")
            return jsonify({'error': 'Too many requests, please try again later.'}), 429
        return None

    @app.after_request
    def after_request(response):
        apply_security_headers(response, production=app.config.get('ENV_NAME') == 'production')
        if app.config.get('ACCESS_LOG'):
            started = g.get('request_started')
            elapsed = (time.perf_counter() - started) * 1000 if started else 0.0
            app.logger.info(f"{request.method} {request.full_path.rstrip('?')} "
                            f"{response.status_code} {elapsed:.1f}ms")
        return response


def register_commands(app):
    """Register Flask CLI commands"""

    @app.cli.command('seed-data')
    @click.argument('path', type=click.Path(exists=True, dir_okay=False))
    def seed_data_command(path):
        """Load projects, experience and achievements from a JSON file."""
        from utils.seed import seed_file
        results = seed_file(path)
        for kind, counts in results.items():
            click.echo(f"{kind}: {counts['created']} created, {counts['skipped']} skipped")


if __name__ == '__main__':
    # Get environment
    env = os.environ.get('FLASK_ENV', 'development')

    # Create app
    app = create_app(env)

    # Run development server
    app.run(
        host='0.0.0.0',
        port=app.config.get('PORT', 5000),
        debug=(env == 'development')
    )
