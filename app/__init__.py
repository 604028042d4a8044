"""
Application Factory
Creates and configures the Flask application
"""
import logging

from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from app.config import get_config
from app.errors import AppError
from app.extensions import db, socketio

logger = logging.getLogger(__name__)


def configure_logging(level):
    """Plain-text logging to stderr, configured once"""
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s %(name)s %(message)s'
        ))
        root.addHandler(handler)
    root.setLevel(str(level).upper())


def register_error_handlers(app):
    """JSON bodies for every error the API can return"""

    @app.errorhandler(AppError)
    def handle_app_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        message = 'Route not found' if error.code == 404 else error.description
        return jsonify({'message': message}), error.code

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        logger.exception('Database error')
        return jsonify({'message': 'Failed to complete the request'}), 500


def create_app(config_name=None):
    """
    Application factory pattern
    Creates and configures Flask app
    """
    app = Flask(__name__)

    # Load configuration
    if config_name:
        from app.config import config
        app.config.from_object(config[config_name])
    else:
        app.config.from_object(get_config())

    configure_logging(app.config['LOG_LEVEL'])

    # Initialize extensions
    db.init_app(app)
    socketio.init_app(
        app,
        cors_allowed_origins=app.config['SOCKETIO_CORS_ALLOWED_ORIGINS'],
        async_mode=app.config['SOCKETIO_ASYNC_MODE']
    )

    # Register blueprints (JSON API under /api)
    from app.routes import forms_bp, responses_bp, public_bp
    app.register_blueprint(forms_bp, url_prefix='/api/forms')
    app.register_blueprint(responses_bp, url_prefix='/api/responses')
    app.register_blueprint(public_bp, url_prefix='/api')

    register_error_handlers(app)

    # Register Socket.IO events
    from app.sockets import register_socket_events
    with app.app_context():
        register_socket_events()

    # Create database tables
    with app.app_context():
        db.create_all()
        logger.info('Database tables created/verified')

    return app
