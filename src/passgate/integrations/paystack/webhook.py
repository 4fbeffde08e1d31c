import hashlib
import hmac
import json

from passgate.core.errors import SignatureVerificationError


def canonical_json(body: dict) -> bytes:
    # compact form, same bytes JSON.stringify would produce
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def compute_signature(body: dict, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), canonical_json(body), hashlib.sha512).hexdigest()


def construct_event(payload: bytes, signature: str | None, secret: str) -> dict:
    """
    Paystack signature 검증 + event 파싱.

    The HMAC-SHA512 is computed over the canonical serialisation of the
    parsed body and compared with the x-paystack-signature header.
    """
    if not signature:
        raise SignatureVerificationError("Missing signature")

    try:
        body = json.loads(payload)
    except ValueError as e:
        raise SignatureVerificationError("Malformed JSON body") from e
    if not isinstance(body, dict):
        raise SignatureVerificationError("Malformed event payload")

    expected = compute_signature(body, secret).encode("ascii")
    # header values arrive latin-1 decoded and may hold non-ASCII characters
    if not hmac.compare_digest(expected, signature.encode("utf-8", "surrogateescape")):
        raise SignatureVerificationError("Signature mismatch")
    return body
