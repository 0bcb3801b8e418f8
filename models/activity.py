from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from database import Base
from utils.short_id import generate_short_id


class Activity(Base):
    __tablename__ = "activities"

    id = Column(String(32), primary_key=True)
    user_id = Column(String(28), index=True, nullable=False)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=func.now(), server_default=func.now())

    def __init__(self, **kwargs):
        for field in kwargs:
            setattr(self, field, kwargs[field])
        if not getattr(self, 'id', None):
            self.id = generate_short_id()

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'title': self.title,
            'description': self.description,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
        }
