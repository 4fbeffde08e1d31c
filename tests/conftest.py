"""Shared fixtures: in-memory SQLite store, fake payment gateways, TestClient."""

from __future__ import annotations

import hashlib
import hmac
import os
import time
from typing import Optional

# must be set before passgate.core.config is imported
os.environ["ENV"] = "test"
os.environ["DATABASE_URL_OVERRIDE"] = "sqlite://"
os.environ["STRIPE_WEBHOOK_SECRET"] = "whsec_test_secret"
os.environ["PAYSTACK_SECRET_KEY"] = "sk_test_paystack_secret"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from passgate.api import deps
from passgate.core.errors import UpstreamError
from passgate.db.base import Base
from passgate.integrations.paystack.gateway import VerifiedTransaction
from passgate.integrations.stripe.gateway import CheckoutCustomer
from passgate.models.entitlement import Entitlement
from passgate.services.entitlement_store import EntitlementStore

STRIPE_WEBHOOK_SECRET = os.environ["STRIPE_WEBHOOK_SECRET"]
PAYSTACK_SECRET_KEY = os.environ["PAYSTACK_SECRET_KEY"]


class FakeStripeGateway:
    def __init__(self):
        self.line_items: dict[str, str] = {}
        self.customers: dict[str, CheckoutCustomer] = {}
        self.fail = False
        self.delay = 0.0
        self.line_item_calls: list[str] = []
        self.checkouts: list[dict] = []

    def first_line_item_description(self, session_id: str) -> str:
        self.line_item_calls.append(session_id)
        if self.delay:
            time.sleep(self.delay)
        if self.fail:
            raise UpstreamError("Could not fetch checkout line items")
        return self.line_items.get(session_id, "")

    def retrieve_checkout_customer(self, session_id: str) -> CheckoutCustomer:
        if self.fail:
            raise UpstreamError("Could not fetch checkout session")
        return self.customers.get(session_id, CheckoutCustomer(name=None, email=None))

    def create_trial_checkout(self, **kwargs) -> str:
        if self.fail:
            raise UpstreamError("Could not create checkout session")
        self.checkouts.append(kwargs)
        return "https://checkout.stripe.test/c/pay/cs_test_trial"


class FakePaystackGateway:
    def __init__(self):
        self.transactions: dict[str, VerifiedTransaction] = {}
        self.fail = False

    def verify_transaction(self, reference: str) -> VerifiedTransaction:
        if self.fail:
            raise UpstreamError("Could not verify payment reference")
        return self.transactions.get(
            reference, VerifiedTransaction(reference=reference, status=None, email=None, name=None)
        )


def stripe_signature_header(payload: bytes, secret: str = STRIPE_WEBHOOK_SECRET, timestamp: Optional[int] = None) -> str:
    """Signs a payload the way Stripe does (t=...,v1=HMAC-SHA256)."""
    ts = int(time.time()) if timestamp is None else timestamp
    signed = f"{ts}.".encode() + payload
    sig = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={ts},v1={sig}"


def count_entitlements(db: Session) -> int:
    return db.execute(select(func.count()).select_from(Entitlement)).scalar_one()


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def store(db) -> EntitlementStore:
    return EntitlementStore(db)


@pytest.fixture()
def stripe_fake() -> FakeStripeGateway:
    return FakeStripeGateway()


@pytest.fixture()
def paystack_fake() -> FakePaystackGateway:
    return FakePaystackGateway()


@pytest.fixture()
def app(db, stripe_fake, paystack_fake):
    from passgate.main import app

    def _db():
        yield db

    app.dependency_overrides[deps.db_session] = _db
    app.dependency_overrides[deps.stripe_gateway] = lambda: stripe_fake
    app.dependency_overrides[deps.paystack_gateway] = lambda: paystack_fake
    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c
