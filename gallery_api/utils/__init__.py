"""
Utility modules for reusable functionality
"""
from .auth import (
    require_auth,
    get_current_admin,
    AuthError
)
from .response import (
    toast_response,
    iso_timestamp,
    validate_uuid,
    log_error,
    log_info
)

__all__ = [
    # Auth utilities
    'require_auth',
    'get_current_admin',
    'AuthError',

    # Response utilities
    'toast_response',
    'iso_timestamp',
    'validate_uuid',
    'log_error',
    'log_info',
]
