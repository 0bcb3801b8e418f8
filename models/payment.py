from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from database import Base
from utils.short_id import generate_short_id

PAYMENT_STATUSES = ("pending", "processed", "failed")


class Payment(Base):
    __tablename__ = "payments"

    id = Column(String(32), primary_key=True)
    mission_id = Column(String(32), index=True, nullable=False)
    creator_id = Column(String(28), index=True, nullable=False)
    amount = Column(Integer, nullable=False)  # whole currency units, like mission budgets
    currency = Column(String(3), nullable=False, default="USD", server_default="USD")
    status = Column(String(16), nullable=False, default="pending", server_default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now(), server_default=func.now())
    processed_at = Column(DateTime(timezone=True), nullable=True)

    def __init__(self, **kwargs):
        for field in kwargs:
            setattr(self, field, kwargs[field])
        if not getattr(self, 'id', None):
            self.id = generate_short_id()

    def to_dict(self):
        return {
            'id': self.id,
            'missionId': self.mission_id,
            'creatorId': self.creator_id,
            'amount': self.amount,
            'currency': self.currency,
            'status': self.status,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'processedAt': self.processed_at.isoformat() if self.processed_at else None,
        }
