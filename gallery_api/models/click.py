"""
Click tracking model for guest UI events
"""
from sqlalchemy import Column, String, DateTime
from .base import BaseModel, utcnow


class Click(BaseModel):
    """A single button click reported by the public site"""
    __tablename__ = 'clicks'

    button = Column(String(100), nullable=False, index=True)
    page = Column(String(255), nullable=False)
    timestamp = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
