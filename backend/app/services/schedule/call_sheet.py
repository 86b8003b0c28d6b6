"""Call sheet for a shooting day: its scenes and everyone/everything they need."""

from dataclasses import dataclass, field
from datetime import date
from itertools import takewhile
from typing import List, Optional

from sqlalchemy.orm import Session

from app import models
from app.services.errors import NotFoundError, ValidationError
from app.services.store import EntityStore


@dataclass
class CallSheet:
    shooting_day_id: str
    date: date
    day_number: Optional[int]
    call_time: str
    location: str
    scenes: List[models.Scene] = field(default_factory=list)
    cast: List[models.CastMember] = field(default_factory=list)
    crew: List[models.CrewMember] = field(default_factory=list)
    equipment: List[models.Equipment] = field(default_factory=list)


def generate_call_sheet(db: Session, project_id: str, shooting_day_id: str) -> CallSheet:
    store = EntityStore(db)
    day = store.get(models.ShootingDay, shooting_day_id)
    if day is None:
        raise NotFoundError("Shooting day", shooting_day_id)
    if day.project_id != project_id:
        raise ValidationError("Shooting day does not belong to this project", field="shooting_day_id")

    scenes = [
        s for s in store.query(models.Scene, project_id=project_id)
        if shooting_day_id in (s.shooting_day_ids or [])
    ]
    scenes.sort(key=lambda s: _scene_sort_key(s.scene_number))

    cast_ids, crew_ids, equipment_ids = [], [], []
    for scene in scenes:
        _extend_unique(cast_ids, scene.cast_ids)
        _extend_unique(crew_ids, scene.crew_ids)
        _extend_unique(equipment_ids, scene.equipment_ids)

    return CallSheet(
        shooting_day_id=day.id,
        date=day.date,
        day_number=day.day_number,
        call_time=day.call_time or "",
        location=day.location or "",
        scenes=scenes,
        cast=_resolve(store, models.CastMember, cast_ids),
        crew=_resolve(store, models.CrewMember, crew_ids),
        equipment=_resolve(store, models.Equipment, equipment_ids),
    )


def _resolve(store: EntityStore, model, ids):
    # Ids whose record has since been deleted are dropped
    records = (store.get(model, i) for i in ids)
    return [r for r in records if r is not None]


def _extend_unique(target: list, ids) -> None:
    for i in ids or []:
        if i not in target:
            target.append(i)


def _scene_sort_key(scene_number: str):
    # "2" < "10" < "10A"
    digits = "".join(takewhile(str.isdigit, scene_number or ""))
    return (int(digits) if digits else 0, scene_number)
