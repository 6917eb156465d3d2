from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String

from app.database import Base


class Visit(Base):
    __tablename__ = "visits"

    id = Column(Integer, primary_key=True, index=True)
    timestamp = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    path = Column(String, nullable=False)
    device_type = Column(String, nullable=True)
    platform = Column(String, nullable=True)
    browser = Column(String, nullable=True)
    user_id = Column(Integer, nullable=True)
    session_id = Column(String, nullable=False)
