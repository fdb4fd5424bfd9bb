"""
Access code routes

Public: validate and consume codes during registration.
Protected: administrative CRUD used by the dashboard.
"""
from flask import Blueprint, jsonify, request
from gallery_api.services.access_code_store import AccessCodeStore, AccessCodeError
from gallery_api.services.access_gate import AccessGate, status_for
from gallery_api.utils.auth import require_auth, get_current_admin
from gallery_api.utils.response import toast_response, log_error, log_info
from gallery_api.utils.routes_helpers import handle_db_error

access_codes_bp = Blueprint('access_codes', __name__)


def _update_fields(data):
    """Map dashboard payload keys onto store field names"""
    fields = {'code': data.get('code')}
    if 'description' in data:
        fields['description'] = data.get('description')
    if 'maxUses' in data:
        fields['max_uses'] = data.get('maxUses')
    if 'isActive' in data:
        fields['is_active'] = data.get('isActive') is not False
    return fields


# -------------------------
# Public endpoints
# -------------------------

@access_codes_bp.route('/validate/<path:code>', methods=['GET'])
def validate_access_code(code):
    """Preview whether a code can be used; never changes it"""
    try:
        outcome = AccessGate().validate(code)
        if not outcome['valid']:
            return jsonify(outcome), status_for(outcome)
        return jsonify(outcome)

    except Exception as e:
        return handle_db_error(e, 'Error validating access code', valid=False)


@access_codes_bp.route('/use/<path:code>', methods=['POST'])
def use_access_code(code):
    """Consume one use of a code"""
    try:
        outcome = AccessGate().consume(code)
        if not outcome['success']:
            return jsonify(outcome), status_for(outcome)
        return jsonify(outcome)

    except Exception as e:
        return handle_db_error(e, 'Error using access code', success=False)


# -------------------------
# Protected endpoints
# -------------------------

@access_codes_bp.route('', methods=['GET'])
@require_auth
def list_access_codes():
    """Get all access codes, newest first"""
    try:
        access_codes = AccessCodeStore().list_codes()
        return jsonify([access_code.to_dict() for access_code in access_codes])

    except Exception as e:
        log_error('Error fetching access codes', e)
        return toast_response('Server error fetching access codes', 'error', status_code=500)


@access_codes_bp.route('', methods=['POST'])
@require_auth
def create_access_code():
    """Create a new access code"""
    try:
        data = request.get_json(silent=True) or {}

        access_code = AccessCodeStore().create_code(
            data.get('code'),
            description=data.get('description'),
            max_uses=data.get('maxUses'),
            is_active=data.get('isActive', True) is not False
        )
        log_info(f"Access code {access_code.code} created by {get_current_admin().username}")

        return toast_response('Access code created successfully', 'success', access_code.to_dict(), 201)

    except AccessCodeError as e:
        return toast_response(e.message, 'error', status_code=e.status_code)
    except Exception as e:
        handle_db_error(e, 'Error creating access code')
        return toast_response('Server error creating access code', 'error', status_code=500)


@access_codes_bp.route('/<code_id>', methods=['PUT'])
@require_auth
def update_access_code(code_id):
    """Edit code text, description, limits or active flag"""
    try:
        data = request.get_json(silent=True) or {}
        if not str(data.get('code') or '').strip():
            return toast_response('Access code is required', 'error', status_code=400)

        access_code = AccessCodeStore().update_code(code_id, _update_fields(data))
        log_info(f"Access code {access_code.code} updated by {get_current_admin().username}")

        return toast_response('Access code updated successfully', 'success', access_code.to_dict())

    except AccessCodeError as e:
        return toast_response(e.message, 'error', status_code=e.status_code)
    except Exception as e:
        handle_db_error(e, 'Error updating access code')
        return toast_response('Server error updating access code', 'error', status_code=500)


@access_codes_bp.route('/<code_id>', methods=['DELETE'])
@require_auth
def delete_access_code(code_id):
    """Delete an access code"""
    try:
        deleted = AccessCodeStore().delete_code(code_id)
        log_info(f"Access code {deleted['code']} deleted by {get_current_admin().username}")
        return toast_response('Access code deleted successfully', 'success')

    except AccessCodeError as e:
        return toast_response(e.message, 'error', status_code=e.status_code)
    except Exception as e:
        handle_db_error(e, 'Error deleting access code')
        return toast_response('Server error deleting access code', 'error', status_code=500)
