"""
Bearer token authentication for admin routes
"""
import uuid
from functools import wraps

import jwt
from flask import request, jsonify, current_app, g
from gallery_api.models.admin import Admin
from gallery_api.utils.jwt_utils import verify_jwt_token


class AuthError(Exception):
    """Authentication error exception"""
    def __init__(self, message, status_code=401):
        self.message = message
        self.status_code = status_code


def get_bearer_token():
    """Extract the token from an `Authorization: Bearer <token>` header"""
    auth_header = request.headers.get('Authorization')
    if auth_header:
        try:
            scheme, token = auth_header.split(' ', 1)
            if scheme.lower() == 'bearer' and token.strip():
                return token.strip()
        except ValueError:
            pass

    raise AuthError('No token provided')


def authenticate_token(token):
    """Resolve a token to the admin it was issued for"""
    try:
        payload = verify_jwt_token(token)
    except jwt.ExpiredSignatureError:
        raise AuthError('Token expired')
    except jwt.InvalidTokenError:
        raise AuthError('Invalid token')

    try:
        admin_id = uuid.UUID(payload.get('sub', ''))
    except (TypeError, ValueError):
        raise AuthError('Invalid token')

    admin = Admin.find_by_id(admin_id)
    if admin is None:
        raise AuthError('Invalid token')
    return admin


def require_auth(f):
    """Decorator to require a valid admin bearer token"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            admin = authenticate_token(get_bearer_token())

            g.current_admin = admin
            g.current_admin_id = str(admin.id)
            g.current_admin_username = admin.username

            return f(*args, **kwargs)

        except AuthError as e:
            return jsonify({'message': e.message}), e.status_code
        except Exception as e:
            current_app.logger.error(f"Authentication error: {str(e)}")
            return jsonify({'message': 'Internal authentication error'}), 500

    return decorated_function


def get_current_admin():
    """Get current authenticated admin from Flask g object"""
    return getattr(g, 'current_admin', None)
