"""Staff member schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.models.enums import Role


class StaffCreate(BaseModel):
    email: EmailStr = Field(..., max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=8, max_length=128)
    role: str = Field(Role.STAFF.value, max_length=50)
    is_active: bool = True


class StaffUpdate(BaseModel):
    email: EmailStr | None = Field(None, max_length=255)
    name: str | None = Field(None, min_length=1, max_length=255)
    password: str | None = Field(None, min_length=8, max_length=128)
    role: str | None = Field(None, max_length=50)
    is_active: bool | None = None


class StaffLogin(BaseModel):
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class StaffResponse(BaseModel):
    """Staff member without the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    role: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
