class PassGateError(Exception):
    """Base class for domain faults raised by the reconciliation core."""


class SignatureVerificationError(PassGateError):
    """Webhook body could not be authenticated against the shared secret."""


class MissingEmailError(PassGateError):
    """A payment event carried no customer email."""


class UpstreamError(PassGateError):
    """A payment provider API call failed or timed out."""


class DuplicateEntitlementError(PassGateError):
    """An entitlement with the requested custom id already exists."""

    def __init__(self, document_id: str):
        super().__init__(f"Entitlement already exists: {document_id}")
        self.document_id = document_id
