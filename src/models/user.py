"""User model."""

from sqlalchemy import Column, DateTime, Integer, String

from src.database import Base
from src.models.enums import Role
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Restaurant account owner created by the registration wizard."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)
    username = Column(String(100), nullable=True)
    phone = Column(String(50), nullable=True)
    role = Column(String(50), nullable=False, default=Role.USER.value)

    # Company details collected at registration
    company_name = Column(String(255), nullable=True)
    industry = Column(String(100), nullable=True)
    business_size = Column(String(50), nullable=True)
    num_locations = Column(Integer, nullable=True)
    job_title = Column(String(100), nullable=True)

    # Billing, kept in sync by Stripe webhooks
    subscription_plan = Column(String(100), nullable=True)
    subscription_status = Column(String(50), nullable=True)
    stripe_customer_id = Column(String(255), nullable=True, index=True)
    stripe_subscription_id = Column(String(255), nullable=True, index=True)
    subscription_period_start = Column(DateTime(timezone=True), nullable=True)
    subscription_period_end = Column(DateTime(timezone=True), nullable=True)

    # Password reset and remember-me
    reset_token = Column(String(64), nullable=True, index=True)
    reset_token_expires = Column(DateTime(timezone=True), nullable=True)
    remember_token = Column(String(64), nullable=True, index=True)
