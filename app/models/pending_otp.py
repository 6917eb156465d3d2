from datetime import datetime

from sqlalchemy import Column, DateTime, String

from app.database import Base


class PendingOtp(Base):
    __tablename__ = "pending_otps"

    email = Column(String, primary_key=True)
    code = Column(String(6), nullable=False)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
