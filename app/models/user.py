from sqlalchemy import Boolean, Column, Integer, String
from sqlalchemy.orm import relationship

from app.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    # Credentials; username mirrors the registration email
    username = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)  # scrypt "hash.salt"

    # Registration fields
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    mobile = Column(String, nullable=False)
    city = Column(String, nullable=False)
    sub_city = Column(String, nullable=False)
    cycling_proficiency = Column(String, nullable=False)
    type = Column(String, nullable=False)

    # Business sellers only
    business_name = Column(String, nullable=True)
    business_address = Column(String, nullable=True)
    business_phone = Column(String, nullable=True)
    business_hours = Column(String, nullable=True)

    profile_image_url = Column(String, nullable=True)

    is_admin = Column(Boolean, default=False, nullable=False)

    bicycles = relationship("Bicycle", back_populates="seller")
    aadhaar_verification = relationship("AadhaarVerification", back_populates="user", uselist=False)
