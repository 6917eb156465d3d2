from datetime import datetime

from pydantic import BaseModel, Field


class FaqCreate(BaseModel):
    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)
    category: str = Field(min_length=1)
    order: int = 0
    is_active: bool = True


class FaqUpdate(BaseModel):
    question: str | None = None
    answer: str | None = None
    category: str | None = None
    order: int | None = None
    is_active: bool | None = None


class FaqResponse(BaseModel):
    id: int
    question: str
    answer: str
    category: str
    order: int
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
