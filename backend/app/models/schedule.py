from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Date, ForeignKey, Text, JSON, Enum

from app.db.base import Base, new_id

import enum


class ShootingDayStatus(str, enum.Enum):
    scheduled = "scheduled"
    completed = "completed"
    cancelled = "cancelled"


class ScheduleEventKind(str, enum.Enum):
    # Canonical: one event per (shot, shooting day)
    shot = "shot"
    # Legacy coarse model: one event per scene, no shot id
    scene = "scene"


class ShootingDay(Base):
    __tablename__ = "shooting_days"

    id = Column(String(32), primary_key=True, default=new_id)
    project_id = Column(String(32), ForeignKey("projects.id", ondelete="CASCADE"), index=True)

    date = Column(Date, nullable=False)
    day_number = Column(Integer, nullable=True)
    status = Column(Enum(ShootingDayStatus), default=ShootingDayStatus.scheduled)

    call_time = Column(String(8), nullable=True)  # HH:MM
    location = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class ScheduleEvent(Base):
    __tablename__ = "schedule_events"

    id = Column(String(32), primary_key=True, default=new_id)
    project_id = Column(String(32), ForeignKey("projects.id", ondelete="CASCADE"), index=True)
    shooting_day_id = Column(String(32), nullable=False, index=True)

    kind = Column(Enum(ScheduleEventKind), nullable=False, default=ScheduleEventKind.shot)
    scene_id = Column(String(32), nullable=True, index=True)
    shot_id = Column(String(32), nullable=True, index=True)

    # Snapshot of the shot/scene at sync time, used by call sheets
    description = Column(String(255), nullable=True)
    scene_number = Column(String(32), nullable=True)
    location_id = Column(String(32), nullable=True)
    cast_ids = Column(JSON, default=list)
    crew_ids = Column(JSON, default=list)
    equipment_ids = Column(JSON, default=list)

    order = Column(Integer, default=0)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
