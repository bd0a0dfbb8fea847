"""Webhook endpoints for Stripe billing events."""

import json
import logging

import stripe
from fastapi import APIRouter, Response

from src.api.handler import HandlerContext, HandlerOptions, api_route
from src.api.responses import success
from src.config import get_settings
from src.database import open_session
from src.errors import BadRequestError
from src.services.billing_service import BillingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/webhooks", tags=["webhooks"])


@api_route(router, "/stripe", HandlerOptions(method="POST"))
async def stripe_webhook(ctx: HandlerContext) -> Response:
    """Receive a signed Stripe event and update subscription state."""
    payload = await ctx.request.body()
    signature = ctx.request.headers.get("stripe-signature")
    secret = get_settings().stripe_webhook_secret

    if not signature or not secret:
        raise BadRequestError("Missing signature or webhook secret")

    try:
        stripe.Webhook.construct_event(payload, signature, secret)
    except (ValueError, stripe.SignatureVerificationError) as e:
        logger.warning(f"Webhook signature verification failed: {e}")
        raise BadRequestError(f"Webhook signature verification failed: {e}") from e

    # Signature checked above; handlers work on plain dicts
    event = json.loads(payload)
    with open_session() as db:
        handled = BillingService(db).handle_event(event)

    return success(received=True, handled=handled)
