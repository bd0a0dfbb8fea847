"""Job posting schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class JobCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    department: str = Field(..., min_length=1, max_length=100)
    location: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=1)
    responsibilities: str = Field(..., min_length=1)
    requirements: str = Field(..., min_length=1)
    benefits: str | None = None
    salary: str | None = Field(None, max_length=100)
    is_active: bool = True


class JobUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    department: str | None = Field(None, min_length=1, max_length=100)
    location: str | None = Field(None, min_length=1, max_length=255)
    type: str | None = Field(None, min_length=1, max_length=50)
    description: str | None = Field(None, min_length=1)
    responsibilities: str | None = Field(None, min_length=1)
    requirements: str | None = Field(None, min_length=1)
    benefits: str | None = None
    salary: str | None = Field(None, max_length=100)
    is_active: bool | None = None


class JobResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    department: str
    location: str
    type: str
    description: str
    responsibilities: str
    requirements: str
    benefits: str | None
    salary: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime
