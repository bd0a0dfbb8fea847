"""Enums for model fields."""

from enum import StrEnum


class Role(StrEnum):
    """Roles carried by sessions and checked by route configurations."""

    USER = "user"
    ADMIN = "admin"
    STAFF = "staff"
    MANAGER = "manager"


class PageStatus(StrEnum):
    """Publication state of a CMS page."""

    DRAFT = "draft"
    PUBLISHED = "published"


class SubscriptionStatus(StrEnum):
    """Subscription states mirrored from Stripe."""

    ACTIVE = "active"
    TRIALING = "trialing"
    PAST_DUE = "past_due"
    CANCELED = "canceled"
    INCOMPLETE = "incomplete"
    UNPAID = "unpaid"
