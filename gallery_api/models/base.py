"""
Base model with common functionality
"""
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Uuid, inspect
from gallery_api import db


def utcnow():
    return datetime.now(timezone.utc)


class BaseModel(db.Model):
    """Base model class with id and timestamp columns"""
    __abstract__ = True

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column('createdAt', DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column('updatedAt', DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    def to_dict(self):
        """Convert model instance to dictionary"""
        result = {}
        # Attribute names (is_active) differ from column names (isActive);
        # read by attribute, key the output by column
        for attr in inspect(type(self)).column_attrs:
            name = attr.columns[0].name
            value = getattr(self, attr.key)
            if isinstance(value, datetime):
                result[name] = value.isoformat()
            elif isinstance(value, uuid.UUID):
                result[name] = str(value)
            else:
                result[name] = value
        return result

    @classmethod
    def find_by_id(cls, id):
        """Find a record by ID"""
        return db.session.get(cls, id)
