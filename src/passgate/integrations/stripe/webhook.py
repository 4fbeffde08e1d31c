import json

import stripe

from passgate.core.errors import SignatureVerificationError


def construct_event(payload: bytes, signature: str, secret: str) -> dict:
    """
    Stripe signature 검증 + event 파싱.

    The signature is checked against the raw bytes exactly as received;
    only afterwards is the body parsed. Returns the event as a plain dict.
    """
    try:
        body = payload.decode("utf-8")
        stripe.WebhookSignature.verify_header(
            body, signature, secret, tolerance=stripe.Webhook.DEFAULT_TOLERANCE
        )
        event = json.loads(body)
    except (stripe.SignatureVerificationError, ValueError) as e:
        raise SignatureVerificationError(type(e).__name__) from e

    if not isinstance(event, dict) or "type" not in event:
        raise SignatureVerificationError("Malformed event payload")
    return event
