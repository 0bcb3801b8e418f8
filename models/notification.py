from sqlalchemy import Column, String, DateTime, Boolean
from sqlalchemy.sql import func
from database import Base
from utils.short_id import generate_short_id


class Notification(Base):
    """Per-user notification feed, the data the dashboard used to read from the realtime store."""
    __tablename__ = "notifications"

    id = Column(String(32), primary_key=True)
    user_id = Column(String(28), index=True, nullable=False)
    message = Column(String, nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=func.now(), server_default=func.now())
    read = Column(Boolean, nullable=False, default=False, server_default='0')

    def __init__(self, **kwargs):
        for field in kwargs:
            setattr(self, field, kwargs[field])
        if not getattr(self, 'id', None):
            self.id = generate_short_id()

    def to_dict(self):
        return {
            'id': self.id,
            'message': self.message,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
            'read': self.read,
        }
