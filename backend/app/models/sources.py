"""Source entities a budget item can link to."""
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, Text, Float

from app.db.base import Base, new_id


class CastMember(Base):
    __tablename__ = "cast_members"

    id = Column(String(32), primary_key=True, default=new_id)
    project_id = Column(String(32), ForeignKey("projects.id", ondelete="CASCADE"), index=True)

    actor_name = Column(String(255), nullable=False)
    character_name = Column(String(255), nullable=True)
    rate = Column(Float, nullable=True)
    agent = Column(String(255), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class CrewMember(Base):
    __tablename__ = "crew_members"

    id = Column(String(32), primary_key=True, default=new_id)
    project_id = Column(String(32), ForeignKey("projects.id", ondelete="CASCADE"), index=True)

    name = Column(String(255), nullable=False)
    role = Column(String(255), nullable=True)
    department = Column(String(255), nullable=True)
    rate = Column(Float, nullable=True)
    rate_type = Column(String(16), default="daily")  # daily, hourly, weekly

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Equipment(Base):
    __tablename__ = "equipment"

    id = Column(String(32), primary_key=True, default=new_id)
    project_id = Column(String(32), ForeignKey("projects.id", ondelete="CASCADE"), index=True)

    name = Column(String(255), nullable=False)
    category = Column(String(255), nullable=True)
    daily_rate = Column(Float, nullable=True)
    weekly_rate = Column(Float, nullable=True)
    rental_vendor = Column(String(255), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Location(Base):
    __tablename__ = "locations"

    id = Column(String(32), primary_key=True, default=new_id)
    project_id = Column(String(32), ForeignKey("projects.id", ondelete="CASCADE"), index=True)

    name = Column(String(255), nullable=False)
    address = Column(Text, nullable=True)
    rental_cost = Column(Float, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
