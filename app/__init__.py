"""
Flask Application Factory
"""

import logging
import os
from datetime import datetime

from flask import Flask, jsonify, send_from_directory
from werkzeug.exceptions import HTTPException

from config import config
from extensions import db, migrate, jwt, bcrypt, cors, limiter
from app.errors import ApiError
from app.utils.jwt_handlers import register_jwt_handlers
from app.utils.responses import error_response


def create_app(config_name=None):
    """Application factory pattern"""

    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config.get(config_name, config['default']))
    app.config['ENV_NAME'] = config_name

    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    bcrypt.init_app(app)
    cors.init_app(app, resources={
        r"/api/*": {
            "origins": app.config['CORS_ORIGINS'],
            "methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"]
        }
    })
    limiter.init_app(app)

    register_jwt_handlers(jwt)
    register_blueprints(app)
    register_error_handlers(app)

    from app.commands import register_commands
    register_commands(app)

    # Create database tables
    with app.app_context():
        db.create_all()

    app.logger.info(f'GharSathi API started ({config_name})')
    return app


def configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(level)


def register_blueprints(app):
    """Register Flask blueprints"""
    from app.api import auth_bp, listings_bp, bookings_bp, upload_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(listings_bp, url_prefix='/api/listings')
    app.register_blueprint(upload_bp, url_prefix='/api/upload')
    app.register_blueprint(bookings_bp, url_prefix='/api/bookings')

    @app.route('/')
    def index():
        return jsonify({
            'success': True,
            'message': 'GharSathi API is running',
            'version': '1.0.0',
            'status': 'active'
        }), 200

    @app.route('/health')
    @limiter.exempt
    def health_check():
        return jsonify({'success': True, 'status': 'healthy', 'message': 'API is running'}), 200

    @app.route('/api/test')
    def api_test():
        return jsonify({
            'success': True,
            'message': 'GharSathi API is running successfully!',
            'timestamp': datetime.utcnow().isoformat(),
            'environment': app.config['ENV_NAME'],
            'version': '1.0.0'
        }), 200

    @app.route('/uploads/<path:filename>')
    def uploaded_file(filename):
        folder = app.config.get('UPLOAD_FOLDER', 'uploads')
        if not os.path.isabs(folder):
            folder = os.path.join(app.root_path, '..', folder)
        return send_from_directory(os.path.abspath(folder), filename)


def register_error_handlers(app):
    """Register error handlers"""

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return error.to_response()

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'success': False, 'message': 'API endpoint not found'}), 404

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({'success': False, 'message': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_exception(error):
        db.session.rollback()
        app.logger.exception(f'Unhandled exception: {str(error)}')
        return error_response('Internal server error', 500, error)
