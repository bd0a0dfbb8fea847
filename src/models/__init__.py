"""SQLAlchemy models."""

from src.models.job import Job
from src.models.page import Page
from src.models.slideshow import SlideShow
from src.models.staff_member import StaffMember
from src.models.user import User

__all__ = [
    "User",
    "Page",
    "StaffMember",
    "Job",
    "SlideShow",
]
