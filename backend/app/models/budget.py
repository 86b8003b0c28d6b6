from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, Float, Enum

from app.db.base import Base, new_id

import enum


class LinkKind(str, enum.Enum):
    cast = "cast"
    crew = "crew"
    equipment = "equipment"
    location = "location"


class BudgetCategory(Base):
    __tablename__ = "budget_categories"

    id = Column(String(32), primary_key=True, default=new_id)
    project_id = Column(String(32), ForeignKey("projects.id", ondelete="CASCADE"), index=True)

    name = Column(String(255), nullable=False)
    department = Column(String(255), nullable=True)
    phase = Column(String(32), nullable=True)  # pre-production, production, post-production

    created_at = Column(DateTime, default=datetime.utcnow)


class BudgetItem(Base):
    __tablename__ = "budget_items"

    id = Column(String(32), primary_key=True, default=new_id)
    project_id = Column(String(32), ForeignKey("projects.id", ondelete="CASCADE"), index=True)
    category_id = Column(String(32), ForeignKey("budget_categories.id", ondelete="SET NULL"), nullable=True)

    description = Column(String(512), nullable=False)
    estimated_amount = Column(Float, nullable=False, default=0)
    actual_amount = Column(Float, nullable=False, default=0)

    unit = Column(String(32), nullable=True)  # days, weeks, hours, units
    quantity = Column(Float, nullable=True, default=1)
    unit_rate = Column(Float, nullable=True)

    status = Column(String(32), default="estimated")  # estimated, committed, actual
    vendor = Column(String(255), nullable=True)
    phase = Column(String(32), nullable=True)

    # Advisory link to one source entity. Severing it never touches amounts.
    linked_kind = Column(Enum(LinkKind), nullable=True, index=True)
    linked_id = Column(String(32), nullable=True, index=True)
    linked_scene_id = Column(String(32), nullable=True, index=True)
    last_synced_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
