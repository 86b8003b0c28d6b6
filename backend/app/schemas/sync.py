from datetime import date, datetime
from pydantic import BaseModel
from typing import List, Optional

from app.models.sync_log import SyncStatus
from app.schemas.scene import Scene
from app.schemas.sources import CastMember, CrewMember, Equipment


class Conflicts(BaseModel):
    crew: List[str] = []
    cast: List[str] = []
    equipment: List[str] = []
    location: bool = False

    class Config:
        from_attributes = True


class ReconcileSummary(BaseModel):
    synced: int
    skipped: int
    errors: List[str] = []
    message: str

    class Config:
        from_attributes = True


class ReconcileResult(BaseModel):
    scene_id: str
    created: int
    updated: int
    deleted: int

    class Config:
        from_attributes = True


class SyncJob(BaseModel):
    job_id: str
    project_id: str


class SyncLogEntry(BaseModel):
    id: str
    project_id: Optional[str] = None
    operation: str
    entity_kind: Optional[str] = None
    entity_id: Optional[str] = None
    status: SyncStatus
    error: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class SceneCost(BaseModel):
    scene_id: str
    estimated_cost: float


class SceneBudgetResult(BaseModel):
    scene_id: str
    created_item_ids: List[str]


class CallSheet(BaseModel):
    shooting_day_id: str
    date: date
    day_number: Optional[int] = None
    call_time: str
    location: str
    scenes: List[Scene]
    cast: List[CastMember]
    crew: List[CrewMember]
    equipment: List[Equipment]

    class Config:
        from_attributes = True
