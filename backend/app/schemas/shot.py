from datetime import datetime
from pydantic import BaseModel, Field
from typing import List, Optional

SHOT_STATUS_PATTERN = "^(not-shot|in-progress|completed)$"


class ShotBase(BaseModel):
    shot_number: str
    title: Optional[str] = None
    description: Optional[str] = None
    shooting_day_ids: List[str] = []
    crew_ids: List[str] = []
    cast_ids: List[str] = []
    equipment_ids: List[str] = []
    location_ids: List[str] = []


class ShotCreate(ShotBase):
    scene_id: str


class ShotUpdate(BaseModel):
    shot_number: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = Field(None, pattern=SHOT_STATUS_PATTERN)
    shooting_day_ids: Optional[List[str]] = None
    crew_ids: Optional[List[str]] = None
    cast_ids: Optional[List[str]] = None
    equipment_ids: Optional[List[str]] = None
    location_ids: Optional[List[str]] = None


class Shot(ShotBase):
    id: str
    project_id: str
    scene_id: str
    status: str
    created_at: datetime

    class Config:
        from_attributes = True
