from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from database import Base, JSONDocument


def stats_id(user_type: str, user_id: str) -> str:
    return f"{user_type}:{user_id}"


class DashboardStats(Base):
    __tablename__ = "dashboard_stats"

    id = Column(String(64), primary_key=True)  # "<user_type>:<user_id>"
    user_type = Column(String(16), nullable=False)
    user_id = Column(String(28), index=True, nullable=False)
    stats = Column(JSONDocument, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=func.now(), server_default=func.now(), onupdate=func.now())

    def to_dict(self):
        return dict(self.stats or {})
