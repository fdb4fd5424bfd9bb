"""
Access code persistence

AccessCodeStore is the only component allowed to write to the access_codes
table. Consumption is a single conditional UPDATE so that concurrent
registrations can never push currentUses past maxUses.
"""
import enum
import uuid
from collections import namedtuple
from flask import current_app
from sqlalchemy import select, update, case, false
from sqlalchemy.exc import IntegrityError
from gallery_api import db
from gallery_api.models.access_code import (
    AccessCode,
    MAX_CODE_LENGTH,
    canonicalize_code,
    clamp_max_uses,
)


class ConsumptionError(enum.Enum):
    """Why a code could not be validated or consumed"""
    NOT_FOUND = 'not_found'
    INACTIVE = 'inactive'
    EXHAUSTED = 'exhausted'


LookupResult = namedtuple('LookupResult', ['record', 'error'])
ConsumeResult = namedtuple('ConsumeResult', ['snapshot', 'error'])


class AccessCodeError(Exception):
    """Base error for administrative access code operations"""
    default_message = 'Access code error'
    default_status = 400

    def __init__(self, message=None, status_code=None):
        self.message = message or self.default_message
        self.status_code = status_code or self.default_status
        super().__init__(self.message)


class AccessCodeValidationError(AccessCodeError):
    default_message = 'Access code is required'


class DuplicateAccessCodeError(AccessCodeError):
    default_message = 'Access code already exists'


class AccessCodeNotFoundError(AccessCodeError):
    default_message = 'Access code not found'
    default_status = 404


def classify(record):
    """Return the ConsumptionError for a record, or None if it is usable"""
    if record is None:
        return ConsumptionError.NOT_FOUND
    # Spent codes are also inactive; report them as exhausted so callers can
    # tell "expired" apart from "disabled by an administrator"
    if record.is_exhausted():
        return ConsumptionError.EXHAUSTED
    if not record.is_active:
        return ConsumptionError.INACTIVE
    return None


class AccessCodeStore:
    """Durable storage for access codes with an atomic consume operation"""

    @staticmethod
    def _select():
        # Consumption writes bypass the identity map, so reads always refresh
        return select(AccessCode).execution_options(populate_existing=True)

    def _find_by_code(self, canonical):
        return db.session.execute(
            self._select().where(AccessCode.code == canonical)
        ).scalar_one_or_none()

    def _code_taken(self, canonical, exclude_id=None):
        query = select(AccessCode.id).where(AccessCode.code == canonical)
        if exclude_id is not None:
            query = query.where(AccessCode.id != exclude_id)
        return db.session.execute(query).first() is not None

    @staticmethod
    def _require_code(raw_code):
        canonical = canonicalize_code(raw_code)
        if not canonical:
            raise AccessCodeValidationError('Access code is required')
        if len(canonical) > MAX_CODE_LENGTH:
            raise AccessCodeValidationError(
                f'Access code must be at most {MAX_CODE_LENGTH} characters long'
            )
        return canonical

    @staticmethod
    def _clean_description(description):
        if description is None:
            return ''
        if not isinstance(description, str):
            raise AccessCodeValidationError('Description must be text')
        return description.strip()

    def _commit_unique(self):
        """Commit, reporting a unique-constraint race as a duplicate"""
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise DuplicateAccessCodeError()

    def get_code(self, code_id):
        """Load a code by primary key or raise AccessCodeNotFoundError"""
        try:
            code_id = code_id if isinstance(code_id, uuid.UUID) else uuid.UUID(str(code_id))
        except (TypeError, ValueError):
            raise AccessCodeNotFoundError()

        access_code = db.session.get(AccessCode, code_id, populate_existing=True)
        if access_code is None:
            raise AccessCodeNotFoundError()
        return access_code

    def create_code(self, code, description='', max_uses=1, is_active=True):
        """Create a new access code; currentUses always starts at zero"""
        canonical = self._require_code(code)
        description = self._clean_description(description)
        if self._code_taken(canonical):
            raise DuplicateAccessCodeError()

        access_code = AccessCode(
            code=canonical,
            description=description,
            max_uses=clamp_max_uses(max_uses),
            is_active=bool(is_active),
            current_uses=0
        )
        db.session.add(access_code)
        self._commit_unique()

        current_app.logger.info(
            f"Created access code {access_code.code} (max uses {access_code.max_uses})"
        )
        return access_code

    def find_active_usable(self, code):
        """Return the code if it can currently be consumed, without changing it"""
        canonical = canonicalize_code(code)
        if not canonical:
            return None

        return db.session.execute(
            self._select().where(
                AccessCode.code == canonical,
                AccessCode.is_active.is_(True),
                AccessCode.current_uses < AccessCode.max_uses
            )
        ).scalar_one_or_none()

    def lookup(self, code):
        """Read-only lookup that explains why a code is unusable"""
        canonical = canonicalize_code(code)
        record = self._find_by_code(canonical) if canonical else None
        return LookupResult(record, classify(record))

    def consume_if_usable(self, code, commit=True):
        """
        Atomically spend one use of a code.

        The usability re-check, the increment and the auto-expiry happen in
        one UPDATE statement guarded by the usability predicate. Zero matched
        rows means another caller got there first (or the code was never
        usable); the row is then read only to explain the failure.

        With commit=False the transaction is left open so the caller can
        commit the consumption together with its own writes, or roll both
        back.
        """
        canonical = canonicalize_code(code)
        if not canonical:
            return ConsumeResult(None, ConsumptionError.NOT_FOUND)

        next_uses = AccessCode.current_uses + 1
        statement = (
            update(AccessCode)
            .where(
                AccessCode.code == canonical,
                AccessCode.is_active.is_(True),
                AccessCode.current_uses < AccessCode.max_uses
            )
            .values({
                AccessCode.current_uses: next_uses,
                AccessCode.is_active: case(
                    (next_uses >= AccessCode.max_uses, false()),
                    else_=AccessCode.is_active
                ),
            })
            .returning(AccessCode.id)
            .execution_options(synchronize_session=False)
        )
        row = db.session.execute(statement).first()

        if row is None:
            # An admin edit can make the row usable again between the two
            # statements; the UPDATE already decided this attempt
            error = classify(self._find_by_code(canonical)) or ConsumptionError.EXHAUSTED
            if commit:
                db.session.rollback()
            current_app.logger.warning(f"Rejected consumption of access code {canonical}: {error.value}")
            return ConsumeResult(None, error)

        # Still inside the transaction that holds the row lock, so this read
        # sees exactly the state written above
        record = db.session.execute(
            self._select().where(AccessCode.id == row.id)
        ).scalar_one()
        snapshot = record.to_dict()

        usage = f"{snapshot['currentUses']}/{snapshot['maxUses']} uses, active={snapshot['isActive']}"
        if commit:
            db.session.commit()
            current_app.logger.info(f"Consumed access code {canonical} ({usage})")
        else:
            # The caller commits or rolls back; it logs the outcome
            current_app.logger.debug(f"Pending consumption of access code {canonical} ({usage})")
        return ConsumeResult(snapshot, None)

    def update_code(self, code_id, fields):
        """
        Apply an administrative edit.

        Accepted keys: code, description, max_uses, is_active. currentUses is
        never set from the outside; it is only pulled down when maxUses
        shrinks below it.
        """
        access_code = self.get_code(code_id)
        if 'description' in fields:
            description = self._clean_description(fields['description'])

        if fields.get('code') is not None:
            canonical = self._require_code(fields['code'])
            if canonical != access_code.code and self._code_taken(canonical, exclude_id=access_code.id):
                raise DuplicateAccessCodeError()
            access_code.code = canonical

        if 'description' in fields:
            access_code.description = description

        if 'is_active' in fields:
            access_code.is_active = bool(fields['is_active'])

        if 'max_uses' in fields:
            max_uses = clamp_max_uses(fields['max_uses'])
            access_code.max_uses = max_uses
            # Evaluated against the stored value at flush time
            access_code.current_uses = case(
                (AccessCode.current_uses > max_uses, max_uses),
                else_=AccessCode.current_uses
            )

        self._commit_unique()

        current_app.logger.info(f"Updated access code {access_code.code}")
        return access_code

    def delete_code(self, code_id):
        """Remove a code permanently and return its last state"""
        access_code = self.get_code(code_id)
        snapshot = access_code.to_dict()

        db.session.delete(access_code)
        db.session.commit()

        current_app.logger.info(f"Deleted access code {snapshot['code']}")
        return snapshot

    def list_codes(self):
        """All codes, newest first"""
        return db.session.execute(
            self._select().order_by(AccessCode.created_at.desc())
        ).scalars().all()
