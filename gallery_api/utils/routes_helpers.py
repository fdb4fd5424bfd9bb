"""
Shared utility functions for route handlers
"""
from flask import request, jsonify, current_app
from gallery_api import db


def get_pagination_params():
    """Extract and validate page/limit parameters from request"""
    default_limit = current_app.config.get('CLICKS_DEFAULT_PAGE_SIZE', 10)
    max_limit = current_app.config.get('CLICKS_MAX_PAGE_SIZE', 10000)

    page = max(request.args.get('page', 1, type=int) or 1, 1)
    limit = request.args.get('limit', default_limit, type=int) or default_limit
    limit = min(max(limit, 1), max_limit)
    return page, limit


def build_pagination_response(paginated_query):
    """Build standard pagination response object"""
    return {
        'page': paginated_query.page,
        'per_page': paginated_query.per_page,
        'total': paginated_query.total,
        'pages': paginated_query.pages,
        'has_next': paginated_query.has_next,
        'has_prev': paginated_query.has_prev
    }


def handle_db_error(error, message, status_code=500, **extra):
    """Handle database errors with consistent logging and rollback"""
    db.session.rollback()
    current_app.logger.error(f"{message}: {str(error)}")
    return jsonify({'message': message, **extra}), status_code
