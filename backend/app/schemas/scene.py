from datetime import date, datetime
from pydantic import BaseModel
from typing import List, Optional


class SceneBase(BaseModel):
    scene_number: str
    title: Optional[str] = None
    description: Optional[str] = None
    shooting_day_ids: List[str] = []
    scheduled_date: Optional[date] = None
    crew_ids: List[str] = []
    cast_ids: List[str] = []
    equipment_ids: List[str] = []
    location_id: Optional[str] = None
    location_ids: List[str] = []


class SceneCreate(SceneBase):
    project_id: str


class SceneUpdate(BaseModel):
    scene_number: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    shooting_day_ids: Optional[List[str]] = None
    scheduled_date: Optional[date] = None
    crew_ids: Optional[List[str]] = None
    cast_ids: Optional[List[str]] = None
    equipment_ids: Optional[List[str]] = None
    location_id: Optional[str] = None
    location_ids: Optional[List[str]] = None


class Scene(SceneBase):
    id: str
    project_id: str
    status: str
    created_at: datetime

    class Config:
        from_attributes = True
