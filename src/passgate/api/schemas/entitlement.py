from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CustomerDetailsOut(BaseModel):
    name: str
    email: str
    documentId: str


class ConfirmationOut(BaseModel):
    success: bool = True
    customerDetails: CustomerDetailsOut


class EntitlementOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(validation_alias="document_id")
    email: str
    deviceId: str = Field(validation_alias="device_id")
    expiresAt: int = Field(validation_alias="expires_at")
    isRadioOff: bool = Field(validation_alias="is_radio_off")
    isTrial: bool = Field(validation_alias="is_trial")


class DummyUserIn(BaseModel):
    # all optional here so a missing field is a 400, not a 422
    email: Optional[str] = None
    token: Optional[str] = None
    customId: Optional[str] = None


class DummyUserOut(BaseModel):
    success: bool = True
    documentId: str
    entitlement: EntitlementOut


class TrialCheckoutIn(BaseModel):
    email: Optional[str] = None


class TrialCheckoutOut(BaseModel):
    url: str
