import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from passgate.api.deps import entitlement_deriver, entitlement_store
from passgate.core.config import settings
from passgate.core.errors import SignatureVerificationError
from passgate.integrations.paystack.webhook import construct_event
from passgate.services.entitlement_deriver import EntitlementDeriver, paystack_payment_event
from passgate.services.entitlement_store import EntitlementStore
from passgate.services.webhook_dispatch import dispatch_payment_event

logger = logging.getLogger(__name__)

router = APIRouter(tags=["paystack"])


@router.post("/paystack-style-webhook")
@router.post("/paystack-webhook", include_in_schema=False)
async def paystack_webhook(
    request: Request,
    store: EntitlementStore = Depends(entitlement_store),
    deriver: EntitlementDeriver = Depends(entitlement_deriver),
    paystack_signature: str | None = Header(default=None, alias="x-paystack-signature"),
):
    if not settings.paystack_secret_key:
        logger.error("PAYSTACK_SECRET_KEY is not set")
        raise HTTPException(status_code=500, detail="Webhook not configured")

    payload = await request.body()

    try:
        event = construct_event(payload, paystack_signature, settings.paystack_secret_key.get_secret_value())
    except SignatureVerificationError as e:
        logger.warning("Paystack webhook signature rejected: %s", e)
        raise HTTPException(status_code=401, detail="Invalid signature")

    # provider lookup and commit block; keep them off the event loop
    outcome = await run_in_threadpool(
        dispatch_payment_event,
        paystack_payment_event(event),
        deriver=deriver,
        store=store,
        ack_mode=settings.webhook_ack_mode,
    )
    return JSONResponse(status_code=outcome.status_code, content=outcome.body)
