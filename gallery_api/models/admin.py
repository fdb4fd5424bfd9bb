"""
Admin account model
"""
from sqlalchemy import Column, String
from werkzeug.security import generate_password_hash, check_password_hash
from .base import BaseModel


class Admin(BaseModel):
    """Administrator account created through access-code registration"""
    __tablename__ = 'admins'

    first_name = Column('firstName', String(100), nullable=False)
    last_name = Column('lastName', String(100), nullable=False)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column('password', String(255), nullable=False)
    # Canonical access code consumed at registration
    access_code = Column('accessCode', String(64), nullable=False)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        """Public representation without the password hash or access code"""
        result = super().to_dict()
        result.pop('password', None)
        result.pop('accessCode', None)
        return result
