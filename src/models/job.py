"""Job posting model."""

from sqlalchemy import Boolean, Column, String, Text

from src.database import Base
from src.models.mixins import StringIdMixin, TimestampMixin


class Job(Base, StringIdMixin, TimestampMixin):
    """Careers page job posting."""

    __tablename__ = "jobs"

    title = Column(String(255), nullable=False)
    department = Column(String(100), nullable=False)
    location = Column(String(255), nullable=False)
    type = Column(String(50), nullable=False)  # full-time, part-time, contract
    description = Column(Text, nullable=False)
    responsibilities = Column(Text, nullable=False)
    requirements = Column(Text, nullable=False)
    benefits = Column(Text, nullable=True)
    salary = Column(String(100), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
