from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from app.database import Base


class Bicycle(Base):
    __tablename__ = "bicycles"

    id = Column(Integer, primary_key=True, index=True)
    seller_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category = Column(String, nullable=False)
    brand = Column(String, nullable=True, index=True)
    model = Column(String, nullable=True)
    purchase_year = Column(Integer, nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    gear_transmission = Column(String, nullable=False)
    frame_material = Column(String, nullable=False)
    suspension = Column(String, nullable=False)
    condition = Column(String, nullable=False)
    cycle_type = Column(String, nullable=False)
    wheel_size = Column(String, nullable=False)
    has_receipt = Column(Boolean, default=False, nullable=False)
    additional_details = Column(Text, nullable=True)
    images = Column(JSON, nullable=False)
    is_premium = Column(Boolean, default=False, nullable=False)
    status = Column(String, default="active", nullable=False)
    views = Column(Integer, default=0, nullable=False)
    inquiries = Column(Integer, default=0, nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    seller = relationship("User", back_populates="bicycles")
