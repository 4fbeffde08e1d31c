from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from passgate.api.deps import entitlement_store, paystack_gateway, stripe_gateway
from passgate.api.schemas.entitlement import ConfirmationOut, CustomerDetailsOut
from passgate.core.errors import UpstreamError
from passgate.integrations.paystack.gateway import PaystackGateway
from passgate.integrations.stripe.gateway import StripeGateway
from passgate.services.entitlement_store import EntitlementStore

router = APIRouter(tags=["confirmation"])

# The webhook and the browser redirect race each other. A 404 here means
# "not granted yet" and the frontend is expected to poll.
NOT_FOUND_DETAIL = "No user found with this email"


def _confirm(store: EntitlementStore, *, name: Optional[str], email: Optional[str]) -> ConfirmationOut:
    row = store.find_by_email(email) if email else None
    if row is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)

    return ConfirmationOut(
        customerDetails=CustomerDetailsOut(
            name=name or "Anonymous",
            email=row.email,
            documentId=row.document_id,
        )
    )


@router.get("/thank-you", response_model=ConfirmationOut)
def thank_you(
    session_id: Optional[str] = Query(default=None),
    store: EntitlementStore = Depends(entitlement_store),
    gateway: StripeGateway = Depends(stripe_gateway),
):
    if not session_id:
        raise HTTPException(status_code=400, detail="Session ID is required")

    try:
        customer = gateway.retrieve_checkout_customer(session_id)
    except UpstreamError:
        raise HTTPException(status_code=500, detail="Error fetching checkout session")

    return _confirm(store, name=customer.name, email=customer.email)


@router.get("/paystack-confirmation", response_model=ConfirmationOut)
def paystack_confirmation(
    reference: Optional[str] = Query(default=None),
    store: EntitlementStore = Depends(entitlement_store),
    gateway: PaystackGateway = Depends(paystack_gateway),
):
    if not reference:
        raise HTTPException(status_code=400, detail="Reference is required")

    try:
        txn = gateway.verify_transaction(reference)
    except UpstreamError:
        raise HTTPException(status_code=500, detail="Error verifying payment reference")

    if not txn.succeeded:
        raise HTTPException(status_code=404, detail="Payment not confirmed")

    return _confirm(store, name=txn.name, email=txn.email)
