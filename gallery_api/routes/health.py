"""
Health check routes
"""
from flask import Blueprint, jsonify, Response, current_app
from gallery_api import db
from sqlalchemy import text
from gallery_api.services.metrics_service import metrics_endpoint
from gallery_api.utils.response import iso_timestamp

health_bp = Blueprint('health', __name__)


@health_bp.route('/', methods=['GET'])
def health_check():
    """Basic health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'service': 'gallery-admin-api',
        'version': current_app.config.get('SEM_VER', '0.0.0'),
        'environment': current_app.config.get('ENVIRONMENT'),
        'timestamp': iso_timestamp()
    })


@health_bp.route('/database', methods=['GET'])
def database_health():
    """Database connectivity health check"""
    try:
        db.session.execute(text('SELECT 1'))

        return jsonify({
            'status': 'healthy',
            'database': 'connected',
            'message': 'Database connection successful'
        })
    except Exception as e:
        current_app.logger.error(f"Database health check failed: {str(e)}")
        return jsonify({
            'status': 'unhealthy',
            'database': 'disconnected'
        }), 503


@health_bp.route('/metrics', methods=['GET'])
def prometheus_metrics():
    """Prometheus metrics endpoint"""
    return Response(metrics_endpoint(), mimetype='text/plain')
