import logging
from typing import Dict, Optional

import stripe
from sqlalchemy.orm import Session

from . import storage

logger = logging.getLogger(__name__)

STRIPE_API_VERSION = "2023-10-16"

SUBSCRIPTION_TIERS = {
    "basic": ["Basic resume templates", "AI content suggestions"],
    "pro": ["All templates", "Advanced AI features", "Priority support"],
    "premium": ["All features", "Unlimited AI generations", "24/7 priority support"],
}


class BillingError(Exception):
    """Subscription request rejected by our rules or by Stripe."""


def _client_secret(subscription) -> Optional[str]:
    try:
        return subscription["latest_invoice"]["payment_intent"]["client_secret"]
    except (KeyError, TypeError):
        return None


class BillingService:
    """Stripe subscription pass-through. ``client`` defaults to the stripe module."""

    def __init__(self, api_key: str, prices: Dict[str, str], client=None):
        self.client = client or stripe
        self.api_key = api_key
        self.prices = prices

    def _call(self, fn, *args, **kwargs):
        try:
            return fn(*args, api_key=self.api_key, stripe_version=STRIPE_API_VERSION, **kwargs)
        except stripe.StripeError as e:
            logger.error("Stripe call failed: %s", e)
            raise BillingError(getattr(e, "user_message", None) or str(e)) from e

    def create_subscription(self, db: Session, user_id: int, tier: str) -> Dict[str, Optional[str]]:
        if tier not in SUBSCRIPTION_TIERS or tier not in self.prices:
            raise BillingError(f"Unknown subscription tier: {tier}")

        user = storage.get_user(db, user_id)
        if not user:
            raise BillingError("User not found")

        if not user.stripe_customer_id:
            customer = self._call(self.client.Customer.create, email=user.email, name=user.username)
            user = storage.update_stripe_customer_id(db, user_id, customer["id"])
            logger.info("Created Stripe customer %s for user %s", customer["id"], user_id)

        subscription = self._call(
            self.client.Subscription.create,
            customer=user.stripe_customer_id,
            items=[{"price": self.prices[tier]}],
            payment_behavior="default_incomplete",
            expand=["latest_invoice.payment_intent"],
        )

        storage.update_user_stripe_info(
            db, user_id, stripe_subscription_id=subscription["id"], subscription_tier=tier
        )
        return {"subscription_id": subscription["id"], "client_secret": _client_secret(subscription)}

    def cancel_subscription(self, db: Session, user_id: int) -> None:
        user = storage.get_user(db, user_id)
        if not user or not user.stripe_subscription_id:
            raise BillingError("No active subscription found")

        self._call(self.client.Subscription.cancel, user.stripe_subscription_id)
        storage.update_user_stripe_info(db, user_id, stripe_subscription_id=None, subscription_tier="free")
        logger.info("Cancelled subscription for user %s", user_id)
