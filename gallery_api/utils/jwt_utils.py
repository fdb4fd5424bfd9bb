"""
Utility helpers for issuing and validating admin JWT access tokens.

The token is the only credential the dashboard holds; it is sent with every
admin request as a bearer token.
"""
from datetime import datetime, timedelta, timezone

import jwt
from flask import current_app


def create_jwt_token(admin_id: str, username: str) -> tuple[str, str]:
    """Return a tuple of (token string, ISO8601 expiry timestamp)."""
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=current_app.config['JWT_EXP_MINUTES'])
    payload = {
        "sub": str(admin_id),
        "username": username,
        "exp": expires_at,
    }
    token = jwt.encode(payload, current_app.config['JWT_SECRET'], algorithm=current_app.config['JWT_ALGORITHM'])
    return token, expires_at.isoformat()


def verify_jwt_token(token: str) -> dict:
    """Verify a JWT and return its payload; raises jwt exceptions on failure."""
    return jwt.decode(token, current_app.config['JWT_SECRET'], algorithms=[current_app.config['JWT_ALGORITHM']])
