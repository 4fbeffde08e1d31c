from __future__ import annotations

from passgate.db.session import engine
from passgate.db.base import Base

# 모델 import (Base에 테이블 등록되게)
from passgate.models import entitlement  # noqa: F401


def create_all() -> None:
    Base.metadata.create_all(bind=engine)
