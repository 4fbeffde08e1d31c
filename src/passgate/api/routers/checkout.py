import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException

from passgate.api.deps import stripe_gateway
from passgate.api.schemas.entitlement import TrialCheckoutIn, TrialCheckoutOut
from passgate.core.config import settings
from passgate.core.duration import TRIAL
from passgate.core.errors import UpstreamError
from passgate.integrations.stripe.gateway import StripeGateway

logger = logging.getLogger(__name__)

router = APIRouter(tags=["checkout"])


@router.post("/create-trial-subscription", response_model=TrialCheckoutOut)
def create_trial_subscription(
    payload: Optional[TrialCheckoutIn] = Body(default=None),
    gateway: StripeGateway = Depends(stripe_gateway),
):
    if not settings.stripe_trial_price_id:
        logger.error("STRIPE_TRIAL_PRICE_ID is not set")
        raise HTTPException(status_code=500, detail="Trial checkout not configured")

    try:
        url = gateway.create_trial_checkout(
            price_id=settings.stripe_trial_price_id,
            success_url=settings.checkout_success_url,
            cancel_url=settings.checkout_cancel_url,
            trial_days=TRIAL.days,
            customer_email=payload.email if payload else None,
        )
    except UpstreamError:
        raise HTTPException(status_code=500, detail="Error creating checkout session")

    return TrialCheckoutOut(url=url)
