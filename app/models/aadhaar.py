from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.database import Base


class AadhaarVerification(Base):
    __tablename__ = "aadhaar_verifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False, index=True)
    aadhaar_number = Column(String(12), unique=True, nullable=False)
    front_image_url = Column(String, nullable=False)
    back_image_url = Column(String, nullable=False)
    status = Column(String(20), default="pending", nullable=False)  # pending / verified / rejected
    submitted_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="aadhaar_verification")
