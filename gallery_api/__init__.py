"""
Flask application factory
"""
import os
from flask import Flask, jsonify
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy

# Initialize extensions
db = SQLAlchemy()


def create_app(config_name=None, config_overrides=None):
    """Create Flask application with configuration"""
    app = Flask(__name__)

    # Load configuration
    config_name = config_name or os.environ.get('FLASK_ENV', 'development')

    from config import config
    app.config.from_object(config[config_name])
    if config_overrides:
        app.config.update(config_overrides)

    # Initialize extensions
    db.init_app(app)

    # Initialize metrics service
    if app.config.get('METRICS_ENABLED', True):
        from gallery_api.services.metrics_service import metrics_service
        metrics_service.init_app(app)

    allowed_origins = [app.config['FRONTEND_URL']]

    # Development: use FRONTEND_URL + additional origins from ALLOWED_ORIGINS env var
    if app.config.get('DEBUG', False) and app.config.get('ALLOWED_ORIGINS'):
        allowed_origins.extend(app.config['ALLOWED_ORIGINS'])

    CORS(app, origins=allowed_origins, supports_credentials=True)

    # Auto-initialize database on startup
    with app.app_context():
        from gallery_api.utils.db_init import auto_initialize_database
        auto_initialize_database()

    # Register blueprints
    from gallery_api.routes.health import health_bp
    from gallery_api.routes.access_codes import access_codes_bp
    from gallery_api.routes.admin_auth import admin_auth_bp
    from gallery_api.routes.clicks import clicks_bp

    api_prefix = '/api'
    app.register_blueprint(health_bp, url_prefix=f'{api_prefix}/health')
    app.register_blueprint(access_codes_bp, url_prefix=f'{api_prefix}/access-codes')
    app.register_blueprint(clicks_bp, url_prefix=f'{api_prefix}/clicks')
    app.register_blueprint(admin_auth_bp, url_prefix=api_prefix)

    @app.route(f'{api_prefix}/test', methods=['GET'])
    def server_test():
        return jsonify({'message': 'Admin server is running'})

    # Error handlers
    @app.errorhandler(404)
    def not_found(error):
        return {'message': 'Resource not found'}, 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return {'message': 'Method not allowed'}, 405

    @app.errorhandler(500)
    def internal_error(error):
        return {'message': 'Internal server error'}, 500

    return app
