from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import requests

from passgate.core.errors import UpstreamError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerifiedTransaction:
    reference: str
    status: Optional[str]
    email: Optional[str]
    name: Optional[str]

    @property
    def succeeded(self) -> bool:
        return self.status == "success"


class PaystackGateway:
    def __init__(self, secret_key: str, *, base_url: str = "https://api.paystack.co", timeout: float = 5.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {"Authorization": f"Bearer {secret_key}"}

    def verify_transaction(self, reference: str) -> VerifiedTransaction:
        url = f"{self.base_url}/transaction/verify/{quote(reference, safe='')}"
        try:
            resp = requests.get(url, headers=self.headers, timeout=self.timeout)
            if resp.status_code == 404:
                # unknown reference: nothing to confirm
                return VerifiedTransaction(reference=reference, status=None, email=None, name=None)
            resp.raise_for_status()
            payload = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Paystack verify failed reference=%s: %s", reference, type(e).__name__)
            raise UpstreamError("Could not verify payment reference") from e

        data = payload.get("data") or {}
        customer = data.get("customer") or {}
        names = [customer.get("first_name"), customer.get("last_name")]
        name = " ".join(n for n in names if n) or None

        return VerifiedTransaction(
            reference=reference,
            status=data.get("status"),
            email=customer.get("email"),
            name=name,
        )
