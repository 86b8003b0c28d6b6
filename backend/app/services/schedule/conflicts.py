"""
Scheduling conflict detection.

Given a scene and a shooting day (or a bare date), report which of the
scene's crew, cast and equipment are also needed by another scene on the
same day, and whether another scene uses the same primary location.
Read-only: safe to call on every edit of a scheduling form.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional, Set

from sqlalchemy.orm import Session

from app import models
from app.services.errors import NotFoundError, ValidationError
from app.services.store import EntityStore

# Id the scene editor uses for a scene that has not been saved yet
NEW_SCENE_ID = "new"


@dataclass
class Conflicts:
    crew: List[str] = field(default_factory=list)
    cast: List[str] = field(default_factory=list)
    equipment: List[str] = field(default_factory=list)
    location: bool = False

    def any(self) -> bool:
        return bool(self.crew or self.cast or self.equipment or self.location)


class ConflictDetector:

    def __init__(self, db: Session):
        self.store = EntityStore(db)

    def detect(
        self,
        project_id: str,
        scene_id: str,
        shooting_day_id: Optional[str] = None,
        scheduled_date: Optional[date] = None,
    ) -> Conflicts:
        conflicts = Conflicts()

        # A draft has nothing persisted to compare
        if scene_id == NEW_SCENE_ID:
            return conflicts
        if not shooting_day_id and scheduled_date is None:
            return conflicts

        scene = self.store.get(models.Scene, scene_id)
        if scene is None:
            raise NotFoundError("Scene", scene_id)
        if scene.project_id != project_id:
            raise ValidationError("Scene does not belong to this project", field="scene_id")

        day_ids = self._day_ids(project_id, shooting_day_id, scheduled_date)
        for other in self._same_day_scenes(project_id, day_ids, None if shooting_day_id else scheduled_date):
            if other.id == scene.id:
                continue
            _compare(conflicts, scene, other)

        # Shot-level assignments only show up on the day's events
        for event in self._same_day_events(project_id, day_ids):
            if event.scene_id == scene.id:
                continue
            _compare(conflicts, scene, event)

        return conflicts

    def _day_ids(
        self,
        project_id: str,
        shooting_day_id: Optional[str],
        scheduled_date: Optional[date],
    ) -> Set[str]:
        if shooting_day_id:
            return {shooting_day_id}
        return {d.id for d in self.store.query(models.ShootingDay, project_id=project_id, date=scheduled_date)}

    def _same_day_scenes(
        self,
        project_id: str,
        day_ids: Set[str],
        scheduled_date: Optional[date],
    ) -> List[models.Scene]:
        # Bare date: scenes scheduled directly on it, or on a shooting day that falls on it
        return [
            s for s in self.store.query(models.Scene, project_id=project_id)
            if day_ids.intersection(s.shooting_day_ids or [])
            or (scheduled_date is not None and s.scheduled_date == scheduled_date)
        ]

    def _same_day_events(self, project_id: str, day_ids: Set[str]) -> List[models.ScheduleEvent]:
        events: List[models.ScheduleEvent] = []
        for day_id in sorted(day_ids):
            events.extend(self.store.query(models.ScheduleEvent, project_id=project_id, shooting_day_id=day_id))
        return events


def _compare(conflicts: Conflicts, scene: models.Scene, other) -> None:
    _collect(conflicts.crew, scene.crew_ids, other.crew_ids)
    _collect(conflicts.cast, scene.cast_ids, other.cast_ids)
    _collect(conflicts.equipment, scene.equipment_ids, other.equipment_ids)
    if scene.location_id and other.location_id == scene.location_id:
        conflicts.location = True


def _collect(result: List[str], mine: Optional[Iterable[str]], theirs: Optional[Iterable[str]]) -> None:
    theirs = set(theirs or [])
    for entity_id in mine or []:
        if entity_id in theirs and entity_id not in result:
            result.append(entity_id)
