"""User management schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.models.enums import Role


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own account."""

    name: str | None = Field(None, max_length=255)
    username: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=50)
    company_name: str | None = Field(None, max_length=255)
    job_title: str | None = Field(None, max_length=100)


class UserCreate(BaseModel):
    """Account created by an administrator."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=128)
    role: str = Field(Role.USER.value, max_length=50)


class UserUpdate(ProfileUpdate):
    """Admin edit of any account."""

    email: EmailStr | None = Field(None, max_length=255)
    role: str | None = Field(None, max_length=50)
    subscription_plan: str | None = Field(None, max_length=100)
    subscription_status: str | None = Field(None, max_length=50)


class UserDetail(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str | None
    username: str | None
    phone: str | None
    role: str
    company_name: str | None
    industry: str | None
    business_size: str | None
    num_locations: int | None
    job_title: str | None
    subscription_plan: str | None
    subscription_status: str | None
    stripe_customer_id: str | None
    subscription_period_start: datetime | None
    subscription_period_end: datetime | None
    created_at: datetime
    updated_at: datetime
