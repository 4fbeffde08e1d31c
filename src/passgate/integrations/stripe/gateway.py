from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import stripe

from passgate.core.errors import UpstreamError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckoutCustomer:
    name: Optional[str]
    email: Optional[str]


class StripeGateway:
    """Thin wrapper over the Stripe API calls the service makes."""

    def __init__(self, api_key: Optional[str], *, timeout: float = 5.0):
        # a missing key only fails the calls that need the API
        self.client: Optional[stripe.StripeClient] = None
        if api_key:
            self.client = stripe.StripeClient(
                api_key,
                http_client=stripe.RequestsClient(timeout=timeout),
                max_network_retries=0,
            )

    def _require_client(self) -> stripe.StripeClient:
        if self.client is None:
            logger.error("STRIPE_API_KEY is not set")
            raise UpstreamError("Stripe is not configured")
        return self.client

    def first_line_item_description(self, session_id: str) -> str:
        try:
            items = self._require_client().checkout.sessions.list_line_items(session_id)
        except stripe.StripeError as e:
            logger.error("Stripe line item lookup failed session=%s: %s", session_id, type(e).__name__)
            raise UpstreamError("Could not fetch checkout line items") from e

        if not items.data:
            return ""
        return items.data[0].description or ""

    def retrieve_checkout_customer(self, session_id: str) -> CheckoutCustomer:
        try:
            session = self._require_client().checkout.sessions.retrieve(session_id)
        except stripe.StripeError as e:
            logger.error("Stripe session lookup failed session=%s: %s", session_id, type(e).__name__)
            raise UpstreamError("Could not fetch checkout session") from e

        details = session.customer_details
        if details is None:
            return CheckoutCustomer(name=None, email=None)
        return CheckoutCustomer(name=details.name, email=details.email)

    def create_trial_checkout(
        self,
        *,
        price_id: str,
        success_url: str,
        cancel_url: str,
        trial_days: int = 7,
        customer_email: Optional[str] = None,
    ) -> str:
        params: dict = {
            "mode": "subscription",
            "line_items": [{"price": price_id, "quantity": 1}],
            "subscription_data": {"trial_period_days": trial_days},
            "success_url": success_url,
            "cancel_url": cancel_url,
        }
        if customer_email:
            params["customer_email"] = customer_email

        try:
            session = self._require_client().checkout.sessions.create(params=params)
        except stripe.StripeError as e:
            logger.error("Stripe trial checkout creation failed: %s", type(e).__name__)
            raise UpstreamError("Could not create checkout session") from e

        return session.url
