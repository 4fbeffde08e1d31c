from fastapi import APIRouter, Depends, HTTPException

from passgate.api.deps import entitlement_deriver, entitlement_store
from passgate.api.schemas.entitlement import DummyUserIn, DummyUserOut, EntitlementOut
from passgate.core.errors import DuplicateEntitlementError
from passgate.services.entitlement_deriver import EntitlementDeriver
from passgate.services.entitlement_store import EntitlementStore

router = APIRouter(tags=["entitlements"])


@router.post("/create-dummy-user", response_model=DummyUserOut)
def create_dummy_user(
    payload: DummyUserIn,
    store: EntitlementStore = Depends(entitlement_store),
    deriver: EntitlementDeriver = Depends(entitlement_deriver),
):
    email = (payload.email or "").strip()
    token = (payload.token or "").strip()
    custom_id = (payload.customId or "").strip()
    if not (email and token and custom_id):
        raise HTTPException(status_code=400, detail="email, token and customId are required")

    # token is the plan descriptor, e.g. "7 day trial" or "year"
    entitlement = deriver.grant(email, token)

    try:
        row = store.create(entitlement, custom_id=custom_id)
    except DuplicateEntitlementError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return DummyUserOut(documentId=row.document_id, entitlement=EntitlementOut.model_validate(row))
