from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

AADHAAR_NUMBER_PATTERN = r"^[0-9]{12}$"


class AadhaarStatusEnum(str, Enum):
    pending = "pending"
    verified = "verified"
    rejected = "rejected"


class AadhaarSubmission(BaseModel):
    user_id: int
    aadhaar_number: str = Field(pattern=AADHAAR_NUMBER_PATTERN)
    front_image_url: str = Field(min_length=1)
    back_image_url: str = Field(min_length=1)


class AadhaarVerificationResponse(BaseModel):
    id: int
    user_id: int
    aadhaar_number: str
    front_image_url: str
    back_image_url: str
    status: AadhaarStatusEnum
    submitted_at: datetime | None = None

    model_config = {"from_attributes": True}
