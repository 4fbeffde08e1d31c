import pytest

from passgate.core.errors import DuplicateEntitlementError
from passgate.services.entitlement_store import NewEntitlement

from conftest import count_entitlements


def test_create_generates_document_id(store):
    row = store.create(NewEntitlement(email="a@x.com", expires_at=1_900_000_000))

    assert len(row.document_id) == 20
    assert row.device_id == ""
    assert row.is_radio_off is False
    assert row.is_trial is False
    assert store.get(row.document_id).email == "a@x.com"


def test_create_with_custom_id(store):
    row = store.create(NewEntitlement(email="a@x.com", expires_at=1_900_000_000), custom_id="dummy-1")
    assert row.document_id == "dummy-1"


def test_custom_id_collision_does_not_overwrite(store, db):
    store.create(NewEntitlement(email="a@x.com", expires_at=1), custom_id="dummy-1")

    with pytest.raises(DuplicateEntitlementError):
        store.create(NewEntitlement(email="b@x.com", expires_at=2), custom_id="dummy-1")

    assert store.get("dummy-1").email == "a@x.com"
    assert count_entitlements(db) == 1


def test_find_by_email_returns_first_inserted(store):
    first = store.create(NewEntitlement(email="dup@x.com", expires_at=2_000_000_000))
    store.create(NewEntitlement(email="dup@x.com", expires_at=1_000_000_000))

    found = store.find_by_email("dup@x.com")

    assert found.document_id == first.document_id
    assert found.expires_at == 2_000_000_000


def test_find_by_email_missing(store):
    assert store.find_by_email("nobody@x.com") is None


def test_same_entitlement_twice_is_two_rows(store, db):
    ent = NewEntitlement(email="a@x.com", expires_at=1_900_000_000)
    a = store.create(ent)
    b = store.create(ent)

    assert a.document_id != b.document_id
    assert count_entitlements(db) == 2
