"""
Schedule sync: keep a scene's schedule events matching its shooting-day assignment.

Each shot of a scene needs exactly one shot-level event per shooting day it
is assigned to (its own day list when set, the scene's otherwise).
`reconcile` computes that desired set, diffs it against the events that
exist, creates what is missing and then prunes what is stale, so it can be
re-run at any time and converges to the same result.

Legacy scene-level events (kind="scene", no shot id) come from the older
one-event-per-scene model. They are superseded once the scene has
shot-level events and are removed by `clear_all`.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from app import models
from app.core.redis import reconcile_lock
from app.models.schedule import ScheduleEventKind
from app.services.errors import NotFoundError
from app.services.store import EntityStore

logger = logging.getLogger(__name__)

Pair = Tuple[str, str]  # (shot_id, shooting_day_id)


@dataclass
class ReconcileResult:
    scene_id: str
    created: int = 0
    updated: int = 0
    deleted: int = 0


@dataclass
class ReconcileSummary:
    synced: int = 0
    skipped: int = 0
    errors: List[str] = field(default_factory=list)


class ScheduleSyncService:

    def __init__(self, db: Session, lock_factory: Optional[Callable[[str], Any]] = None):
        self.db = db
        self.store = EntityStore(db)
        self.lock_factory = lock_factory or reconcile_lock

    def reconcile(self, scene_id: str, shooting_day_ids: Iterable[str]) -> ReconcileResult:
        """
        Make the scene's shot-level events match `shooting_day_ids` and per-shot overrides.

        Delegates to `clear_all` only when neither the scene list nor any shot
        carries a day.
        """
        scene = self._get_scene(scene_id)
        day_ids = _unique(shooting_day_ids)
        if not day_ids and not self._shots_have_own_days(scene):
            return self.clear_all(scene_id)

        with self.lock_factory(f"reconcile:{scene.id}"):
            result = self._reconcile(scene, day_ids)

        logger.info(
            "Schedule sync: scene %s -> %d created, %d updated, %d deleted",
            scene.id, result.created, result.updated, result.deleted,
        )
        return result

    def clear_all(self, scene_id: str) -> ReconcileResult:
        """Delete every event for the scene's shots, plus its legacy scene-level events."""
        scene = self._get_scene(scene_id)
        result = ReconcileResult(scene_id=scene.id)

        with self.lock_factory(f"reconcile:{scene.id}"):
            events: Dict[str, models.ScheduleEvent] = {}
            for shot in self.store.query(models.Shot, scene_id=scene.id):
                for event in self.store.query(
                    models.ScheduleEvent, project_id=scene.project_id, shot_id=shot.id
                ):
                    events[event.id] = event
            for event in self.store.query(
                models.ScheduleEvent, project_id=scene.project_id, scene_id=scene.id
            ):
                events[event.id] = event

            for event in events.values():
                self.store.delete(event)
                result.deleted += 1

        logger.info("Schedule sync: scene %s cleared, %d event(s) removed", scene.id, result.deleted)
        return result

    def reconcile_all(self, project_id: str) -> ReconcileSummary:
        """Reconcile every scheduled scene of a project, collecting per-scene errors."""
        if self.store.get(models.Project, project_id) is None:
            raise NotFoundError("Project", project_id)

        summary = ReconcileSummary()
        for scene in self.store.query(models.Scene, project_id=project_id):
            scene_id, scene_number = scene.id, scene.scene_number
            day_ids = list(scene.shooting_day_ids or [])
            if not day_ids:
                summary.skipped += 1
                continue
            try:
                self.reconcile(scene_id, day_ids)
                summary.synced += 1
            except Exception as exc:
                self.db.rollback()
                logger.warning("Schedule sync: scene %s failed during bulk sync", scene_id, exc_info=True)
                summary.errors.append(f"Scene {scene_number}: {exc}")
                summary.skipped += 1

        logger.info(
            "Schedule sync: project %s -> %d synced, %d skipped, %d error(s)",
            project_id, summary.synced, summary.skipped, len(summary.errors),
        )
        return summary

    def _reconcile(self, scene: models.Scene, day_ids: List[str]) -> ReconcileResult:
        result = ReconcileResult(scene_id=scene.id)
        shots = self.store.query(models.Shot, scene_id=scene.id)

        requested = set(day_ids)
        for shot in shots:
            requested.update(shot.shooting_day_ids or [])
        valid_days = self._valid_days(scene.project_id, requested)

        desired: Dict[Pair, models.Shot] = {}
        for shot in shots:
            for day_id in shot.shooting_day_ids or day_ids:
                if day_id in valid_days:
                    desired[(shot.id, day_id)] = shot

        kept: Dict[Pair, models.ScheduleEvent] = {}
        stale: List[models.ScheduleEvent] = []
        for event in self._shot_events(scene, shots):
            pair = (event.shot_id, event.shooting_day_id)
            if pair not in desired or pair in kept:
                stale.append(event)
                continue
            kept[pair] = event

        # Upsert
        for pair, shot in desired.items():
            snapshot = _snapshot(scene, shot)
            event = kept.get(pair)
            if event is None:
                self.store.create(
                    models.ScheduleEvent,
                    project_id=scene.project_id,
                    shooting_day_id=pair[1],
                    kind=ScheduleEventKind.shot,
                    shot_id=shot.id,
                    order=self._next_order(pair[1]),
                    **snapshot,
                )
                result.created += 1
                continue
            changes = {k: v for k, v in snapshot.items() if getattr(event, k) != v}
            if changes:
                self.store.update(event, **changes)
                result.updated += 1

        # Prune
        if desired:
            stale.extend(
                e for e in self.store.query(models.ScheduleEvent, project_id=scene.project_id, scene_id=scene.id)
                if e.kind == ScheduleEventKind.scene
            )
        for event in stale:
            self.store.delete(event)
            result.deleted += 1

        return result

    def _get_scene(self, scene_id: str) -> models.Scene:
        scene = self.store.get(models.Scene, scene_id)
        if scene is None:
            raise NotFoundError("Scene", scene_id)
        return scene

    def _shots_have_own_days(self, scene: models.Scene) -> bool:
        return any(shot.shooting_day_ids for shot in self.store.query(models.Shot, scene_id=scene.id))

    def _valid_days(self, project_id: str, day_ids: Iterable[str]) -> set:
        valid = set()
        for day_id in day_ids:
            day = self.store.get(models.ShootingDay, day_id)
            if day is None or day.project_id != project_id:
                logger.warning("Schedule sync: shooting day %s not found in project %s, skipping", day_id, project_id)
                continue
            valid.add(day_id)
        return valid

    def _shot_events(self, scene: models.Scene, shots: List[models.Shot]) -> List[models.ScheduleEvent]:
        events: Dict[str, models.ScheduleEvent] = {}
        for event in self.store.query(models.ScheduleEvent, kind=ScheduleEventKind.shot, scene_id=scene.id):
            events[event.id] = event
        for shot in shots:
            for event in self.store.query(models.ScheduleEvent, kind=ScheduleEventKind.shot, shot_id=shot.id):
                events[event.id] = event
        # Oldest first, so duplicates beyond the first are the ones pruned
        return sorted(events.values(), key=lambda e: (e.created_at, e.id))

    def _next_order(self, shooting_day_id: str) -> int:
        events = self.store.query(models.ScheduleEvent, shooting_day_id=shooting_day_id)
        return max((e.order or 0 for e in events), default=0) + 1


def _snapshot(scene: models.Scene, shot: models.Shot) -> Dict[str, Any]:
    """Event fields derived from the shot, falling back to the scene, refreshed on every pass."""
    location_ids = shot.location_ids or scene.location_ids or ([scene.location_id] if scene.location_id else [])
    return {
        "scene_id": scene.id,
        "description": shot.title or f"Shot {shot.shot_number}",
        "scene_number": scene.scene_number,
        "location_id": location_ids[0] if location_ids else None,
        "cast_ids": list(shot.cast_ids or scene.cast_ids or []),
        "crew_ids": list(shot.crew_ids or scene.crew_ids or []),
        "equipment_ids": list(shot.equipment_ids or scene.equipment_ids or []),
    }


def _unique(ids: Iterable[str]) -> List[str]:
    seen: Dict[str, None] = {}
    for i in ids or []:
        if i:
            seen.setdefault(i, None)
    return list(seen)
