from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, field_validator

MAX_IMAGES = 5
MIN_PURCHASE_YEAR = 2000


class CategoryEnum(str, Enum):
    adult = "Adult"
    kids = "Kids"


class ConditionEnum(str, Enum):
    fair = "Fair"
    good = "Good"
    like_new = "Like New"


class GearTransmissionEnum(str, Enum):
    non_geared = "Non-Geared"
    multi_speed = "Multi-Speed"


class FrameMaterialEnum(str, Enum):
    steel = "Steel"
    aluminum = "Aluminum"
    carbon_fiber = "Carbon Fiber"


class SuspensionEnum(str, Enum):
    none = "None"
    front = "Front"
    full = "Full"


class CycleTypeEnum(str, Enum):
    mountain = "Mountain"
    road = "Road"
    hybrid = "Hybrid"
    bmx = "BMX"
    other = "Other"


class WheelSizeEnum(str, Enum):
    twelve = "12"
    sixteen = "16"
    twenty = "20"
    twenty_four = "24"
    twenty_six = "26"
    twenty_seven_five = "27.5"
    twenty_nine = "29"


class SortByEnum(str, Enum):
    price_asc = "price_asc"
    price_desc = "price_desc"
    newest = "newest"


class BicycleForm(BaseModel):
    category: CategoryEnum
    brand: str | None = None
    model: str | None = None
    purchase_year: int
    price: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    gear_transmission: GearTransmissionEnum
    frame_material: FrameMaterialEnum
    suspension: SuspensionEnum
    condition: ConditionEnum
    cycle_type: CycleTypeEnum
    wheel_size: WheelSizeEnum
    has_receipt: bool = False
    additional_details: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)

    @field_validator("purchase_year")
    @classmethod
    def validate_purchase_year(cls, value: int) -> int:
        current_year = date.today().year
        if value < MIN_PURCHASE_YEAR or value > current_year:
            raise ValueError(f"purchase_year must be between {MIN_PURCHASE_YEAR} and {current_year}")
        return value


class BicycleCreate(BicycleForm):
    seller_id: int
    images: list[str] = Field(min_length=1, max_length=MAX_IMAGES)


class BicycleFilters(BaseModel):
    is_premium: bool | None = None
    brand: str | None = None
    purchase_year: int | None = None
    condition: str | None = None
    gear_transmission: str | None = None
    frame_material: str | None = None
    suspension: str | None = None
    wheel_size: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None


class BicycleResponse(BaseModel):
    id: int
    seller_id: int
    category: str
    brand: str | None = None
    model: str | None = None
    purchase_year: int
    price: Decimal
    gear_transmission: str
    frame_material: str
    suspension: str
    condition: str
    cycle_type: str
    wheel_size: str
    has_receipt: bool
    additional_details: str | None = None
    images: list[str]
    is_premium: bool
    status: str
    views: int
    inquiries: int
    latitude: float | None = None
    longitude: float | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
