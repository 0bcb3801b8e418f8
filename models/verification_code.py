from sqlalchemy import Column, Integer, String, DateTime, Boolean, Index, func
from database import Base

class VerificationCode(Base):
    __tablename__ = "verification_codes"
    __table_args__ = (
        Index("idx_verification_codes_email_code_used", "email", "code", "used"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(256), index=True, nullable=False)
    code = Column(String(6), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    used = Column(Boolean, default=False, nullable=False)

    def to_dict(self):
        # The code itself is deliberately left out so records can be logged
        return {
            'id': self.id,
            'email': self.email,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'expiresAt': self.expires_at.isoformat() if self.expires_at else None,
            'used': self.used,
        }
