"""
SQLAlchemy models for the gallery admin API
"""
from .base import BaseModel
from .access_code import AccessCode
from .admin import Admin
from .click import Click

__all__ = [
    'BaseModel',
    'AccessCode',
    'Admin',
    'Click'
]
