from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, Enum

from app.db.base import Base, new_id

import enum


class SyncStatus(str, enum.Enum):
    ok = "ok"
    failed = "failed"


class SyncLogEntry(Base):
    __tablename__ = "sync_log"

    id = Column(String(32), primary_key=True, default=new_id)
    project_id = Column(String(32), nullable=True, index=True)

    # e.g. "budget.sync_on_update", "schedule.reconcile"
    operation = Column(String(64), nullable=False)
    entity_kind = Column(String(32), nullable=True)
    entity_id = Column(String(32), nullable=True, index=True)

    status = Column(Enum(SyncStatus), nullable=False)
    error = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
