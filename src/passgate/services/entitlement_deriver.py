from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

from passgate.core.duration import DurationPolicy, SubstringDurationPolicy
from passgate.core.errors import MissingEmailError
from passgate.core.payment_events import (
    PAYSTACK_CHARGE_SUCCESS,
    PAYSTACK_SUBSCRIPTION_CREATE,
    STRIPE_CHECKOUT_COMPLETED,
)
from passgate.services.entitlement_store import NewEntitlement

LineItemLookup = Callable[[str], str]


class PaymentEvent(Protocol):
    """A verified provider event that can grant an entitlement."""

    provider: str
    event_type: str

    def email(self) -> Optional[str]: ...

    def descriptor(self) -> str: ...


@dataclass
class StripeCheckoutCompleted:
    session: dict[str, Any]
    line_items: LineItemLookup
    provider: str = "stripe"
    event_type: str = STRIPE_CHECKOUT_COMPLETED

    def email(self) -> Optional[str]:
        details = self.session.get("customer_details") or {}
        return details.get("email")

    def descriptor(self) -> str:
        # secondary API call; raises UpstreamError on failure
        return self.line_items(self.session["id"])


@dataclass
class PaystackPaymentEvent:
    data: dict[str, Any]
    event_type: str
    provider: str = "paystack"

    def email(self) -> Optional[str]:
        customer = self.data.get("customer") or {}
        return customer.get("email")

    def descriptor(self) -> str:
        plan = self.data.get("plan") or {}
        return plan.get("name") or ""


def stripe_payment_event(event: dict, line_items: LineItemLookup) -> Optional[PaymentEvent]:
    if event.get("type") != STRIPE_CHECKOUT_COMPLETED:
        return None
    session = (event.get("data") or {}).get("object") or {}
    return StripeCheckoutCompleted(session=session, line_items=line_items)


def paystack_payment_event(event: dict) -> Optional[PaymentEvent]:
    event_type = event.get("event")
    if event_type not in (PAYSTACK_SUBSCRIPTION_CREATE, PAYSTACK_CHARGE_SUCCESS):
        return None
    return PaystackPaymentEvent(data=event.get("data") or {}, event_type=event_type)


class EntitlementDeriver:
    def __init__(
        self,
        policy: Optional[DurationPolicy] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.policy = policy or SubstringDurationPolicy()
        self.clock = clock

    def grant(self, email: str, descriptor: str) -> NewEntitlement:
        duration = self.policy.classify(descriptor)
        return NewEntitlement(
            email=email,
            expires_at=int(self.clock()) + duration.seconds,
            is_trial=duration.is_trial,
        )

    def derive(self, event: PaymentEvent) -> NewEntitlement:
        """
        Builds the entitlement for a verified event.

        The email is checked before the descriptor so an event without a
        customer email never triggers a provider lookup.
        """
        email = event.email()
        if not email:
            raise MissingEmailError(f"{event.provider} {event.event_type} has no customer email")
        return self.grant(email, event.descriptor())
