from datetime import datetime

from pydantic import BaseModel, Field

from app.schemas.common import CamelModel


class VisitCreate(CamelModel):
    path: str = Field(min_length=1)
    device_type: str | None = None
    platform: str | None = None
    browser: str | None = None


class VisitResponse(BaseModel):
    id: int
    timestamp: datetime
    path: str
    device_type: str | None = None
    platform: str | None = None
    browser: str | None = None
    user_id: int | None = None
    session_id: str

    model_config = {"from_attributes": True}
