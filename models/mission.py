from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from database import Base, JSONDocument
from utils.short_id import generate_short_id

MISSION_STATUSES = ("pending", "inProgress", "completed", "cancelled")


class Mission(Base):
    __tablename__ = "missions"

    id = Column(String(32), primary_key=True)
    title = Column(String, nullable=False)
    type = Column(String, nullable=True)
    brand_id = Column(String(28), index=True, nullable=False)
    brand = Column(JSONDocument, nullable=True)  # {"name": ..., "photoURL": ...}
    assigned_to = Column(JSONDocument, nullable=True)  # {"id": ..., "name": ..., "photoURL": ...}
    assigned_creators = Column(JSONDocument, nullable=True)  # list of creator ids
    deadline = Column(DateTime(timezone=True), nullable=True)
    budget = Column(Integer, nullable=False, default=0)
    status = Column(String(16), nullable=False, default="pending", server_default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now(), server_default=func.now())

    def __init__(self, **kwargs):
        for field in kwargs:
            setattr(self, field, kwargs[field])
        if not getattr(self, 'id', None):
            self.id = generate_short_id()

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'type': self.type,
            'brandId': self.brand_id,
            'brand': self.brand,
            'assignedTo': self.assigned_to,
            'assignedCreators': self.assigned_creators or [],
            'deadline': self.deadline.isoformat() if self.deadline else None,
            'budget': self.budget,
            'status': self.status,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
