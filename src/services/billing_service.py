"""Apply Stripe billing events to user subscription state."""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.errors import DatabaseError
from src.models.enums import SubscriptionStatus
from src.models.user import User

logger = logging.getLogger(__name__)


def _timestamp(value: int | None) -> datetime | None:
    return datetime.fromtimestamp(value, tz=UTC) if value else None


def _first_item(subscription: dict[str, Any]) -> dict[str, Any]:
    items = (subscription.get("items") or {}).get("data") or []
    return items[0] if items else {}


def _plan_id(subscription: dict[str, Any]) -> str | None:
    price = _first_item(subscription).get("price") or {}
    metadata = price.get("metadata") or {}
    return (
        metadata.get("plan_id")
        or (subscription.get("metadata") or {}).get("plan_id")
        or price.get("lookup_key")
        or price.get("id")
    )


def _period(subscription: dict[str, Any]) -> tuple[datetime | None, datetime | None]:
    # Newer API versions report the period on the subscription item
    item = _first_item(subscription)
    start = subscription.get("current_period_start") or item.get("current_period_start")
    end = subscription.get("current_period_end") or item.get("current_period_end")
    return _timestamp(start), _timestamp(end)


class BillingService:
    """Keeps ``User`` subscription columns in step with Stripe."""

    def __init__(self, db: Session):
        self.db = db

    def handle_event(self, event: dict[str, Any]) -> bool:
        """Apply one webhook event. Returns False for event types we ignore."""
        handlers = {
            "checkout.session.completed": self.checkout_completed,
            "customer.subscription.created": self.subscription_changed,
            "customer.subscription.updated": self.subscription_changed,
            "customer.subscription.deleted": self.subscription_deleted,
            "invoice.paid": self.invoice_paid,
            "invoice.payment_failed": self.payment_failed,
        }
        handler = handlers.get(event.get("type"))
        if handler is None:
            logger.info(f"Unhandled Stripe event type: {event.get('type')}")
            return False

        try:
            handler(event["data"]["object"])
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to apply Stripe event {event.get('id')}: {e}", exc_info=True)
            raise DatabaseError("Failed to record subscription change") from e
        return True

    def find_user(self, customer_id: str | None, user_id: Any = None) -> User | None:
        if user_id:
            try:
                user = self.db.query(User).filter(User.id == int(user_id)).first()
            except (TypeError, ValueError):
                user = None
            if user is not None:
                return user
        if customer_id:
            return self.db.query(User).filter(User.stripe_customer_id == customer_id).first()
        return None

    def checkout_completed(self, session: dict[str, Any]) -> None:
        metadata = session.get("metadata") or {}
        user = self.find_user(session.get("customer"), metadata.get("user_id"))
        if user is None:
            logger.warning(f"No user found for checkout session {session.get('id')}")
            return

        user.stripe_customer_id = session.get("customer") or user.stripe_customer_id
        user.stripe_subscription_id = session.get("subscription") or user.stripe_subscription_id
        user.subscription_status = SubscriptionStatus.ACTIVE.value
        if metadata.get("plan_id"):
            user.subscription_plan = metadata["plan_id"]
        logger.info(f"Checkout completed for user {user.id}")

    def subscription_changed(self, subscription: dict[str, Any]) -> None:
        user = self.find_user(
            subscription.get("customer"), (subscription.get("metadata") or {}).get("user_id")
        )
        if user is None:
            logger.warning(f"No user found for customer {subscription.get('customer')}")
            return

        user.stripe_customer_id = subscription.get("customer") or user.stripe_customer_id
        user.stripe_subscription_id = subscription.get("id")
        user.subscription_status = subscription.get("status")
        user.subscription_plan = _plan_id(subscription) or user.subscription_plan
        start, end = _period(subscription)
        user.subscription_period_start = start or user.subscription_period_start
        user.subscription_period_end = end or user.subscription_period_end
        logger.info(f"Subscription {subscription.get('id')} is {subscription.get('status')} for user {user.id}")

    def subscription_deleted(self, subscription: dict[str, Any]) -> None:
        user = self.find_user(subscription.get("customer"))
        if user is None:
            logger.warning(f"No user found for customer {subscription.get('customer')}")
            return
        user.subscription_status = SubscriptionStatus.CANCELED.value
        _, end = _period(subscription)
        user.subscription_period_end = end or user.subscription_period_end

    def invoice_paid(self, invoice: dict[str, Any]) -> None:
        user = self.find_user(invoice.get("customer"))
        if user is None:
            logger.warning(f"No user found for customer {invoice.get('customer')}")
            return
        user.subscription_status = SubscriptionStatus.ACTIVE.value
        if invoice.get("period_end"):
            user.subscription_period_end = _timestamp(invoice["period_end"])

    def payment_failed(self, invoice: dict[str, Any]) -> None:
        user = self.find_user(invoice.get("customer"))
        if user is None:
            logger.warning(f"No user found for customer {invoice.get('customer')}")
            return
        user.subscription_status = SubscriptionStatus.PAST_DUE.value
        logger.warning(f"Payment failed for user {user.id}")
