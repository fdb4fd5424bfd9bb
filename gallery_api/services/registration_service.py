"""
Admin registration gated by access code consumption
"""
from flask import current_app
from sqlalchemy.exc import IntegrityError
from gallery_api import db
from gallery_api.models.admin import Admin
from gallery_api.services.access_gate import AccessGate
from gallery_api.services.metrics_service import MetricsService


class RegistrationError(Exception):
    """Registration rejected with a user-facing message"""
    def __init__(self, message, reason, status_code=400):
        self.message = message
        self.reason = reason
        self.status_code = status_code
        super().__init__(message)


class RegistrationService:
    """Create admin accounts for callers holding a usable access code"""

    def __init__(self, gate=None):
        self.gate = gate or AccessGate()

    def _reject(self, message, reason):
        MetricsService.track_registration(reason)
        current_app.logger.warning(f"Admin registration rejected: {message}")
        raise RegistrationError(message, reason)

    def register(self, first_name, last_name, username, password, access_code):
        """
        Register a new admin.

        The access code is consumed inside the same transaction that inserts
        the admin row. If the insert fails (e.g. another request claimed the
        username after the pre-check) both are rolled back and the code keeps
        its use.

        Returns the created admin and the code that was consumed; raises
        RegistrationError otherwise.
        """
        fields = [first_name, last_name, username, password, access_code]
        if not all(isinstance(value, str) and value.strip() for value in fields):
            self._reject('All fields are required', 'missing_fields')

        first_name = first_name.strip()
        last_name = last_name.strip()
        username = username.strip()

        min_length = current_app.config.get('MIN_PASSWORD_LENGTH', 6)
        if len(password) < min_length:
            self._reject(f'Password must be at least {min_length} characters long', 'weak_password')

        if Admin.query.filter_by(username=username).first():
            self._reject('Admin username already exists', 'username_taken')

        outcome = self.gate.consume(access_code, commit=False)
        if not outcome['success']:
            db.session.rollback()
            self._reject(outcome['message'], outcome['reason'])

        admin = Admin(
            first_name=first_name,
            last_name=last_name,
            username=username,
            access_code=outcome['code']
        )
        admin.set_password(password)
        db.session.add(admin)

        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            self._reject('Admin username already exists', 'username_taken')

        MetricsService.track_registration('success')
        current_app.logger.info(f"Registered admin {username} with access code {outcome['code']}")

        return {
            'admin': admin.to_dict(),
            'accessCodeUsed': {
                'code': outcome['code'],
                'description': outcome['description']
            }
        }
