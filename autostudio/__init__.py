"""
AutoStudio - AI Content Studio
Trend research, SEO article generation and WordPress publishing
"""
from flask import Flask, jsonify
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix
import os
import logging

__version__ = "1.0.0"

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_app(config_name=None):
    """Application factory pattern"""
    app = Flask(__name__)

    # Fix for running behind a reverse proxy (Render, Heroku, etc.)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    # Load config
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    from autostudio.config import config
    # Use instance instead of class to support @property
    config_instance = config.get(config_name, config['default'])()
    app.config.from_object(config_instance)

    # Enable CORS - IMPORTANT: Set CORS_ORIGINS env var in production!
    cors_origins = app.config.get('CORS_ORIGINS', '*')
    if cors_origins == '*' and config_name == 'production':
        logger.warning("SECURITY: CORS_ORIGINS is set to '*' in production! Set specific origins.")
    CORS(app, origins=cors_origins)

    # Rate limiting
    limiter = Limiter(
        app=app,
        key_func=get_remote_address,
        default_limits=[l.strip() for l in app.config['RATE_LIMIT_DEFAULTS'].split(';') if l.strip()],
        storage_uri="memory://",
        enabled=app.config.get('RATE_LIMIT_ENABLED', True)
    )
    app.limiter = limiter  # Store for use in routes

    # Initialize database
    if app.config.get('STORAGE_BACKEND') == 'database':
        from autostudio.database import init_db
        init_db(app)

    # Application state (settings, members, articles, scheduler)
    from autostudio.services.state import StudioState
    state = StudioState.from_app(app)
    app.extensions['autostudio'] = state

    # Register blueprints
    from autostudio.routes import register_routes
    register_routes(app)

    # ==========================================
    # GLOBAL ERROR HANDLERS
    # ==========================================

    from autostudio.services.errors import StudioError, http_status

    @app.errorhandler(StudioError)
    def studio_error(error):
        status = http_status(error)
        if status >= 500:
            logger.error(f"{type(error).__name__}: {error.message} ({error.detail})")
        return jsonify({
            'error': error.message,
            'category': error.category
        }), status

    @app.errorhandler(400)
    def bad_request(error):
        return jsonify({
            'error': 'Bad request',
            'message': str(error.description) if hasattr(error, 'description') else 'Invalid request'
        }), 400

    @app.errorhandler(401)
    def unauthorized(error):
        return jsonify({
            'error': 'Unauthorized',
            'message': 'Authentication required'
        }), 401

    @app.errorhandler(403)
    def forbidden(error):
        return jsonify({
            'error': 'Forbidden',
            'message': 'Access denied'
        }), 403

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({
            'error': 'Not found',
            'message': 'The requested resource was not found'
        }), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({
            'error': 'Method not allowed',
            'message': 'The method is not allowed for the requested URL'
        }), 405

    @app.errorhandler(429)
    def rate_limited(error):
        return jsonify({
            'error': 'Too many requests',
            'message': str(error.description) if hasattr(error, 'description') else 'Rate limit exceeded'
        }), 429

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Internal server error: {error}")
        return jsonify({
            'error': 'Internal server error',
            'message': 'An unexpected error occurred'
        }), 500

    @app.errorhandler(Exception)
    def handle_exception(error):
        """Catch-all for unhandled exceptions"""
        if isinstance(error, HTTPException):
            return jsonify({'error': error.name, 'message': error.description}), error.code
        logger.error(f"Unhandled exception: {error}", exc_info=True)
        return jsonify({
            'error': 'Server error',
            'message': 'An unexpected error occurred'
        }), 500

    # Health check
    @app.route('/health')
    def health():
        storage_status = 'ok'
        if app.config.get('STORAGE_BACKEND') == 'database':
            try:
                from autostudio.database import db
                db.session.execute(db.text('SELECT 1'))
                storage_status = 'connected'
            except Exception as e:
                storage_status = f'error: {str(e)[:50]}'

        return {
            'status': 'healthy' if storage_status in ('ok', 'connected') else 'degraded',
            'version': __version__,
            'storage': app.config.get('STORAGE_BACKEND'),
            'storage_status': storage_status,
            'gemini_configured': bool(app.config.get('GEMINI_API_KEY')),
            'wordpress_configured': state.wp_config.is_configured,
            'scheduler': state.scheduler.get_status()['status']
        }

    # API info endpoint
    @app.route('/api')
    def api_info():
        return {
            'name': 'AutoStudio API',
            'version': __version__,
            'status': 'running',
            'endpoints': {
                'auth': '/api/auth',
                'members': '/api/members',
                'settings': '/api/settings',
                'research': '/api/research',
                'articles': '/api/articles',
                'generate': '/api/generate',
                'logs': '/api/logs'
            }
        }

    # Background scheduler; enabling auto-refresh also starts it on demand
    if app.config.get('SCHEDULER_ENABLED') and not app.config.get('TESTING'):
        try:
            state.scheduler.start()
        except Exception as e:
            app.logger.warning(f"Could not start scheduler: {e}")

    return app
