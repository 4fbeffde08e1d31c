from collections.abc import Generator
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from passgate.core.config import settings
from passgate.db.session import get_db
from passgate.integrations.paystack.gateway import PaystackGateway
from passgate.integrations.stripe.gateway import StripeGateway
from passgate.services.entitlement_deriver import EntitlementDeriver
from passgate.services.entitlement_store import EntitlementStore


def db_session() -> Generator[Session, None, None]:
    """FastAPI dependency: DB session"""
    yield from get_db()


def entitlement_store(db: Session = Depends(db_session)) -> EntitlementStore:  # noqa: B008
    return EntitlementStore(db)


def entitlement_deriver() -> EntitlementDeriver:
    return EntitlementDeriver()


@lru_cache
def stripe_gateway() -> StripeGateway:
    api_key = settings.stripe_api_key
    return StripeGateway(
        api_key.get_secret_value() if api_key else None,
        timeout=settings.provider_timeout_sec,
    )


@lru_cache
def paystack_gateway() -> PaystackGateway:
    if not settings.paystack_secret_key:
        raise RuntimeError("PAYSTACK_SECRET_KEY is not set")
    return PaystackGateway(
        settings.paystack_secret_key.get_secret_value(),
        base_url=settings.paystack_base_url,
        timeout=settings.provider_timeout_sec,
    )
