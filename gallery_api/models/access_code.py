"""
Access code model gating admin registration
"""
from sqlalchemy import Column, String, Integer, Boolean, Text, CheckConstraint
from .base import BaseModel

MAX_CODE_LENGTH = 64


def canonicalize_code(raw_code):
    """Trim and uppercase a candidate code; the only place codes are normalized"""
    if raw_code is None:
        return ''
    return str(raw_code).strip().upper()


def clamp_max_uses(value, default=1):
    """Coerce an incoming maxUses value to an integer of at least 1"""
    try:
        max_uses = int(value)
    except (TypeError, ValueError):
        max_uses = default
    return max(1, max_uses)


class AccessCode(BaseModel):
    """Limited-use code that must be presented to register an admin"""
    __tablename__ = 'access_codes'
    __table_args__ = (
        CheckConstraint('"maxUses" >= 1', name='ck_access_codes_max_uses_positive'),
        CheckConstraint('"currentUses" >= 0', name='ck_access_codes_current_uses_non_negative'),
        CheckConstraint('"currentUses" <= "maxUses"', name='ck_access_codes_current_uses_within_max'),
    )

    code = Column(String(MAX_CODE_LENGTH), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=False, default='')
    is_active = Column('isActive', Boolean, nullable=False, default=True, index=True)
    max_uses = Column('maxUses', Integer, nullable=False, default=1)
    current_uses = Column('currentUses', Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<AccessCode(code={self.code}, uses={self.current_uses}/{self.max_uses}, active={self.is_active})>"

    @property
    def remaining_uses(self):
        return max(0, self.max_uses - self.current_uses)

    def can_be_used(self):
        """Check if the access code is active and has uses left"""
        return bool(self.is_active) and self.current_uses < self.max_uses

    def is_exhausted(self):
        return self.current_uses >= self.max_uses

