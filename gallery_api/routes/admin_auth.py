"""
Admin authentication routes - registration, login and admin listing
"""
from flask import Blueprint, jsonify, request, current_app
from gallery_api.models.admin import Admin
from gallery_api.services.registration_service import RegistrationService, RegistrationError
from gallery_api.utils.auth import require_auth
from gallery_api.utils.jwt_utils import create_jwt_token
from gallery_api.utils.routes_helpers import handle_db_error

admin_auth_bp = Blueprint('admin_auth', __name__)


@admin_auth_bp.route('/admin/register', methods=['POST'])
def register_admin():
    """
    Register an admin account.

    Requires firstName, lastName, username, password and a usable
    accessCode. The code is consumed only if the account is created.
    """
    data = request.get_json(silent=True) or {}

    try:
        result = RegistrationService().register(
            first_name=data.get('firstName'),
            last_name=data.get('lastName'),
            username=data.get('username'),
            password=data.get('password'),
            access_code=data.get('accessCode')
        )

        return jsonify({
            'message': 'Admin registration successful',
            'accessCodeUsed': result['accessCodeUsed']
        }), 201

    except RegistrationError as e:
        return jsonify({'message': e.message, 'reason': e.reason}), e.status_code
    except Exception as e:
        return handle_db_error(e, 'Server error during admin registration')


@admin_auth_bp.route('/admin/login', methods=['POST'])
def login_admin():
    """Exchange username and password for a bearer token"""
    data = request.get_json(silent=True) or {}
    username = (data.get('username') or '').strip()
    password = data.get('password')

    if not username or not password:
        return jsonify({'message': 'Username and password are required'}), 400

    try:
        admin = Admin.query.filter_by(username=username).first()
        if not admin or not admin.check_password(password):
            current_app.logger.warning(f"Failed login attempt for admin: {username}")
            return jsonify({'message': 'Invalid username or password'}), 401

        token, expires_at = create_jwt_token(admin.id, admin.username)
        current_app.logger.info(f"Successful login for admin: {admin.username}")

        return jsonify({
            'message': 'Login successful',
            'token': token,
            'expires_at': expires_at,
            'admin': admin.to_dict()
        })

    except Exception as e:
        return handle_db_error(e, 'Server error during login')


@admin_auth_bp.route('/admins', methods=['GET'])
@require_auth
def list_admins():
    """All admins sorted by username, without credentials"""
    try:
        admins = Admin.query.order_by(Admin.username.asc()).all()
        return jsonify([admin.to_dict() for admin in admins])

    except Exception as e:
        return handle_db_error(e, 'Server error fetching admin list')
