"""Dashboard slideshow model."""

from sqlalchemy import Boolean, Column, Integer, String, Text

from src.database import Base
from src.models.mixins import StringIdMixin, TimestampMixin


class SlideShow(Base, StringIdMixin, TimestampMixin):
    """One slide of the dashboard carousel."""

    __tablename__ = "slideshow"

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String(1000), nullable=False)
    icon_type = Column(String(50), nullable=False)
    order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
