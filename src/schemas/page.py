"""Page schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.models.enums import PageStatus

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class PageCreate(BaseModel):
    """Create a new page."""

    title: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255, pattern=SLUG_PATTERN)
    status: PageStatus = PageStatus.DRAFT
    content: Any = None
    page_builder_content: str | None = None
    page_template: str = Field("default", max_length=50)
    parent_id: int | None = None
    menu_order: int = 0
    show_in_menu: bool = False
    show_in_footer: bool = False
    meta_title: str | None = Field(None, max_length=255)
    meta_description: str | None = Field(None, max_length=500)
    meta_keywords: str | None = Field(None, max_length=500)


class PageUpdate(BaseModel):
    """Update a page. Only fields present in the request are changed."""

    title: str | None = Field(None, min_length=1, max_length=255)
    slug: str | None = Field(None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    status: PageStatus | None = None
    content: Any = None
    page_builder_content: str | None = None
    page_template: str | None = Field(None, max_length=50)
    parent_id: int | None = None
    menu_order: int | None = None
    show_in_menu: bool | None = None
    show_in_footer: bool | None = None
    meta_title: str | None = Field(None, max_length=255)
    meta_description: str | None = Field(None, max_length=500)
    meta_keywords: str | None = Field(None, max_length=500)


class PageResponse(BaseModel):
    """Page response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    title: str
    status: str
    content: Any
    page_builder_content: str | None
    page_template: str
    parent_id: int | None
    menu_order: int
    show_in_menu: bool
    show_in_footer: bool
    meta_title: str | None
    meta_description: str | None
    meta_keywords: str | None
    created_at: datetime
    updated_at: datetime


class MenuPage(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    title: str
    parent_id: int | None
    menu_order: int
