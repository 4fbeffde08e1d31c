from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from passgate.core.errors import DuplicateEntitlementError
from passgate.models.entitlement import Entitlement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewEntitlement:
    """Canonical entitlement produced by the deriver, not yet stored."""

    email: str
    expires_at: int
    is_trial: bool = False
    device_id: str = ""
    is_radio_off: bool = False


def generate_document_id() -> str:
    return uuid.uuid4().hex[:20]


class EntitlementStore:
    """
    Append-only access to the tokens table.

    There is no write deduplication: storing the same NewEntitlement twice
    yields two rows. Reads by email return the earliest row.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, entitlement: NewEntitlement, custom_id: Optional[str] = None) -> Entitlement:
        document_id = custom_id or generate_document_id()
        if custom_id is not None and self.get(custom_id) is not None:
            raise DuplicateEntitlementError(custom_id)

        row = Entitlement(
            document_id=document_id,
            email=entitlement.email,
            device_id=entitlement.device_id,
            expires_at=entitlement.expires_at,
            is_radio_off=entitlement.is_radio_off,
            is_trial=entitlement.is_trial,
        )

        try:
            self.db.add(row)
            self.db.commit()
        except IntegrityError as e:
            # lost a race on the same custom id
            self.db.rollback()
            raise DuplicateEntitlementError(document_id) from e
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Entitlement created id=%s email=%s expires_at=%s trial=%s",
            row.document_id,
            row.email,
            row.expires_at,
            row.is_trial,
        )
        return row

    def find_by_email(self, email: str) -> Optional[Entitlement]:
        stmt = (
            select(Entitlement)
            .where(Entitlement.email == email)
            .order_by(Entitlement.id.asc())
            .limit(1)
        )
        return self.db.execute(stmt).scalars().first()

    def get(self, document_id: str) -> Optional[Entitlement]:
        stmt = select(Entitlement).where(Entitlement.document_id == document_id)
        return self.db.execute(stmt).scalars().first()
