from enum import Enum

from pydantic import BaseModel, EmailStr, Field, model_validator

from app.schemas.common import CamelModel


class ProficiencyEnum(str, Enum):
    beginner = "beginner"
    occasional = "occasional"
    expert = "expert"


class RegisterRequest(CamelModel):
    username: str | None = None
    password: str = Field(min_length=1)
    confirm_password: str
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    mobile: str = Field(min_length=1)
    city: str = Field(min_length=1)
    sub_city: str = Field(min_length=1)
    cycling_proficiency: ProficiencyEnum
    type: str = "user"
    business_name: str | None = None
    business_address: str | None = None
    business_phone: str | None = None
    business_hours: str | None = None
    is_verifying_otp: bool = False
    otp: str | None = None

    @model_validator(mode="after")
    def check_passwords(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        # Usernames are always the registration email
        self.username = str(self.email)
        return self

    def user_fields(self) -> dict:
        """Fields persisted on the user row, minus the password pair and OTP flow keys."""
        return self.model_dump(
            exclude={"password", "confirm_password", "is_verifying_otp", "otp"},
            mode="json",
        )


class LoginRequest(BaseModel):
    username: str
    password: str


class PasswordChange(CamelModel):
    current_password: str | None = None
    new_password: str | None = None


class UserResponse(BaseModel):
    id: int
    username: str
    first_name: str
    last_name: str
    email: str
    mobile: str
    city: str
    sub_city: str
    cycling_proficiency: str
    type: str
    business_name: str | None = None
    business_address: str | None = None
    business_phone: str | None = None
    business_hours: str | None = None
    profile_image_url: str | None = None
    is_admin: bool

    model_config = {"from_attributes": True}
