from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from passgate.db.base import Base


class Entitlement(Base):
    __tablename__ = "tokens"

    # insertion order; find_by_email relies on it
    id: Mapped[int] = mapped_column(primary_key=True)

    document_id: Mapped[str] = mapped_column(String(64), unique=True, index=True)

    # not unique: duplicates are tolerated, first row wins on lookup
    email: Mapped[str] = mapped_column(String(320), index=True)

    # filled later by the device-binding flow
    device_id: Mapped[str] = mapped_column(String(200), default="")
    expires_at: Mapped[int] = mapped_column(Integer)
    is_radio_off: Mapped[bool] = mapped_column(Boolean, default=False)
    is_trial: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
