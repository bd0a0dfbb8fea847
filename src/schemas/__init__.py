"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from src.schemas.job import JobCreate, JobResponse, JobUpdate
from src.schemas.page import PageCreate, PageResponse, PageUpdate
from src.schemas.slideshow import SlideCreate, SlideResponse, SlideUpdate
from src.schemas.staff import StaffCreate, StaffResponse, StaffUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "UserResponse",
    "PageCreate",
    "PageUpdate",
    "PageResponse",
    "StaffCreate",
    "StaffUpdate",
    "StaffResponse",
    "JobCreate",
    "JobUpdate",
    "JobResponse",
    "SlideCreate",
    "SlideUpdate",
    "SlideResponse",
]
