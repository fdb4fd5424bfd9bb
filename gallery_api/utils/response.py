"""
Response formatting utilities
Standardizes API response patterns across routes
"""
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from flask import current_app, jsonify


def toast_response(message: str, toast_type: str = 'info', data: Any = None, status_code: int = 200):
    """
    Response carrying a toast notification for the admin dashboard.

    Shape: {"toast": {"message", "type", "show"}, "data": ...}; data is
    omitted when None.
    """
    body = {
        'toast': {
            'message': message,
            'type': toast_type,
            'show': True
        }
    }
    if data is not None:
        body['data'] = data
    return jsonify(body), status_code


def iso_timestamp() -> str:
    """Get current UTC timestamp in ISO format"""
    return datetime.now(timezone.utc).isoformat()


def log_error(message: str, error: Exception = None, extra_data: Optional[Dict[str, Any]] = None) -> None:
    """Standardized error logging"""
    log_msg = f"{message}"
    if error:
        log_msg += f": {str(error)}"
    if extra_data:
        log_msg += f" | Data: {extra_data}"

    current_app.logger.error(log_msg)


def log_info(message: str, extra_data: Optional[Dict[str, Any]] = None) -> None:
    """Standardized info logging"""
    log_msg = message
    if extra_data:
        log_msg += f" | Data: {extra_data}"

    current_app.logger.info(log_msg)


def validate_uuid(uuid_string: str) -> bool:
    """Validate UUID format"""
    try:
        uuid.UUID(uuid_string)
        return True
    except (ValueError, TypeError, AttributeError):
        return False
