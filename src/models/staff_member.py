"""Staff member model."""

from sqlalchemy import Boolean, Column, String

from src.database import Base
from src.models.enums import Role
from src.models.mixins import StringIdMixin, TimestampMixin


class StaffMember(Base, StringIdMixin, TimestampMixin):
    """Back-office staff login, separate from restaurant accounts."""

    __tablename__ = "staff_members"

    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash
    role = Column(String(50), nullable=False, default=Role.STAFF.value)
    is_active = Column(Boolean, nullable=False, default=True)
