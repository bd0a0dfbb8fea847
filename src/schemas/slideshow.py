"""Slideshow schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SlideCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    image_url: str = Field(..., min_length=1, max_length=1000)
    icon_type: str = Field(..., min_length=1, max_length=50)
    order: int = 0
    is_active: bool = True


class SlideUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, min_length=1)
    image_url: str | None = Field(None, min_length=1, max_length=1000)
    icon_type: str | None = Field(None, min_length=1, max_length=50)
    order: int | None = None
    is_active: bool | None = None


class SlideResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    image_url: str
    icon_type: str
    order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
