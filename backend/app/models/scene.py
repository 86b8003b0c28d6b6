from datetime import datetime
from sqlalchemy import Column, String, DateTime, Date, ForeignKey, Text, JSON

from app.db.base import Base, new_id


class Scene(Base):
    __tablename__ = "scenes"

    id = Column(String(32), primary_key=True, default=new_id)
    project_id = Column(String(32), ForeignKey("projects.id", ondelete="CASCADE"), index=True)

    scene_number = Column(String(32), nullable=False)
    title = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)

    # Ordered list of shooting day ids this scene is scheduled on
    shooting_day_ids = Column(JSON, default=list)
    # For scenes not yet tied to a formal shooting day
    scheduled_date = Column(Date, nullable=True)

    crew_ids = Column(JSON, default=list)
    cast_ids = Column(JSON, default=list)
    equipment_ids = Column(JSON, default=list)

    # Primary location, plus any secondary ones
    location_id = Column(String(32), nullable=True)
    location_ids = Column(JSON, default=list)

    status = Column(String(32), default="not-shot")  # not-shot, in-progress, completed

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
