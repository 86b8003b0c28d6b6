from datetime import date, datetime
from pydantic import BaseModel
from typing import List, Optional

from app.models.schedule import ScheduleEventKind, ShootingDayStatus


class ShootingDayCreate(BaseModel):
    project_id: str
    date: date
    day_number: Optional[int] = None
    call_time: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None


class ShootingDay(ShootingDayCreate):
    id: str
    status: ShootingDayStatus
    created_at: datetime

    class Config:
        from_attributes = True


class ScheduleEvent(BaseModel):
    id: str
    project_id: str
    shooting_day_id: str
    kind: ScheduleEventKind
    scene_id: Optional[str] = None
    shot_id: Optional[str] = None
    description: Optional[str] = None
    scene_number: Optional[str] = None
    location_id: Optional[str] = None
    cast_ids: List[str] = []
    crew_ids: List[str] = []
    equipment_ids: List[str] = []
    order: int = 0

    class Config:
        from_attributes = True
