from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, Text, JSON

from app.db.base import Base, new_id


class Shot(Base):
    __tablename__ = "shots"

    id = Column(String(32), primary_key=True, default=new_id)

    project_id = Column(
        String(32),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    scene_id = Column(
        String(32),
        ForeignKey("scenes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    shot_number = Column(String(32), nullable=False)
    title = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    status = Column(String(32), default="not-shot")  # not-shot, in-progress, completed

    # Overrides, copied from the scene at creation time and edited independently.
    # An empty list means "use the scene's assignment".
    shooting_day_ids = Column(JSON, default=list)
    crew_ids = Column(JSON, default=list)
    cast_ids = Column(JSON, default=list)
    equipment_ids = Column(JSON, default=list)
    location_ids = Column(JSON, default=list)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
