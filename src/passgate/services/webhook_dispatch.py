from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError

from passgate.core.errors import MissingEmailError, UpstreamError
from passgate.services.entitlement_deriver import EntitlementDeriver, PaymentEvent
from passgate.services.entitlement_store import EntitlementStore

logger = logging.getLogger(__name__)


@dataclass
class WebhookOutcome:
    status_code: int
    body: dict[str, Any] = field(default_factory=dict)


def dispatch_payment_event(
    event: Optional[PaymentEvent],
    *,
    deriver: EntitlementDeriver,
    store: EntitlementStore,
    ack_mode: str = "always",
) -> WebhookOutcome:
    """
    Grants the entitlement for an already verified event.

    Unrecognised events (None) are acknowledged without side effects. A
    missing email is the one failure reported back to the provider as 400.
    Provider and database failures are logged and, in "always" mode, still
    acknowledged so the provider does not keep retrying.
    """
    if event is None:
        return WebhookOutcome(200, {"received": True})

    try:
        entitlement = deriver.derive(event)
        row = store.create(entitlement)
    except MissingEmailError as e:
        logger.warning("Webhook rejected: %s", e)
        return WebhookOutcome(400, {"detail": "Email not found"})
    except (UpstreamError, SQLAlchemyError) as e:
        logger.exception("Webhook processing failed provider=%s type=%s", event.provider, event.event_type)
        if ack_mode == "after_persist":
            return WebhookOutcome(500, {"detail": "Error processing webhook"})
        return WebhookOutcome(200, {"received": True, "processed": False, "error": type(e).__name__})

    return WebhookOutcome(200, {"received": True, "processed": True, "documentId": row.document_id})
