import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from passgate.api.deps import entitlement_deriver, entitlement_store, stripe_gateway
from passgate.core.config import settings
from passgate.core.errors import SignatureVerificationError
from passgate.integrations.stripe.gateway import StripeGateway
from passgate.integrations.stripe.webhook import construct_event
from passgate.services.entitlement_deriver import EntitlementDeriver, stripe_payment_event
from passgate.services.entitlement_store import EntitlementStore
from passgate.services.webhook_dispatch import dispatch_payment_event

logger = logging.getLogger(__name__)

router = APIRouter(tags=["stripe"])


@router.post("/webhook")
async def stripe_webhook(
    request: Request,
    store: EntitlementStore = Depends(entitlement_store),
    deriver: EntitlementDeriver = Depends(entitlement_deriver),
    gateway: StripeGateway = Depends(stripe_gateway),
    stripe_signature: str | None = Header(default=None, alias="Stripe-Signature"),
):
    if not stripe_signature:
        raise HTTPException(status_code=400, detail="Missing Stripe-Signature header")
    if not settings.stripe_webhook_secret:
        logger.error("STRIPE_WEBHOOK_SECRET is not set")
        raise HTTPException(status_code=500, detail="Webhook not configured")

    # raw bytes: re-serialising would break the signature
    payload = await request.body()

    # 1) Verify + parse
    try:
        event = construct_event(payload, stripe_signature, settings.stripe_webhook_secret.get_secret_value())
    except SignatureVerificationError as e:
        logger.warning("Stripe webhook signature rejected: %s", e)
        raise HTTPException(status_code=400, detail="Webhook signature verification failed")

    # 2) Grant: provider lookup and commit block, keep them off the event loop
    outcome = await run_in_threadpool(
        dispatch_payment_event,
        stripe_payment_event(event, gateway.first_line_item_description),
        deriver=deriver,
        store=store,
        ack_mode=settings.webhook_ack_mode,
    )
    return JSONResponse(status_code=outcome.status_code, content=outcome.body)
