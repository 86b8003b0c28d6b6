from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.dependencies import VIEWER_ROLES, ensure_project_role, get_current_user_id, get_db, get_or_404
from app import models, schemas
from app.services.schedule.scene_status import update_scene_status
from app.services.schedule.schedule_sync import ScheduleSyncService
from app.services.sync_log import run_sync

router = APIRouter(prefix="/shots", tags=["shots"])

# Assignments a new shot copies from its scene when left empty
INHERITED_FIELDS = ("shooting_day_ids", "crew_ids", "cast_ids", "equipment_ids", "location_ids")


@router.post("/", response_model=schemas.Shot, status_code=status.HTTP_201_CREATED)
def create_shot(
    shot_in: schemas.ShotCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    scene = get_or_404(db, models.Scene, shot_in.scene_id, "Scene")
    ensure_project_role(db, scene.project_id, user_id)

    data = shot_in.model_dump()
    for field in INHERITED_FIELDS:
        if not data.get(field):
            data[field] = list(getattr(scene, field) or [])
    if not data["location_ids"] and scene.location_id:
        data["location_ids"] = [scene.location_id]

    shot = models.Shot(project_id=scene.project_id, **data)
    db.add(shot)
    db.commit()
    db.refresh(shot)

    if scene.shooting_day_ids or shot.shooting_day_ids:
        _sync_scene_schedule(db, scene)
    db.refresh(shot)
    return shot


@router.get("/scene/{scene_id}", response_model=List[schemas.Shot])
def list_shots_for_scene(
    scene_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    scene = get_or_404(db, models.Scene, scene_id, "Scene")
    ensure_project_role(db, scene.project_id, user_id, VIEWER_ROLES)
    return (
        db.query(models.Shot)
        .filter(models.Shot.scene_id == scene_id)
        .order_by(models.Shot.created_at)
        .all()
    )


@router.patch("/{shot_id}", response_model=schemas.Shot)
def update_shot(
    shot_id: str,
    shot_in: schemas.ShotUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    shot = get_or_404(db, models.Shot, shot_id, "Shot")
    ensure_project_role(db, shot.project_id, user_id)

    data = shot_in.model_dump(exclude_unset=True)
    old_day_ids = list(shot.shooting_day_ids or [])
    old_status = shot.status

    for field, value in data.items():
        setattr(shot, field, value)
    db.add(shot)
    db.commit()
    db.refresh(shot)

    scene = db.get(models.Scene, shot.scene_id)
    if sorted(old_day_ids) != sorted(shot.shooting_day_ids or []):
        _sync_scene_schedule(db, scene)

    if shot.status != old_status:
        run_sync(
            db, "scene.update_status",
            update_scene_status, db, scene.id,
            project_id=scene.project_id, entity_kind="scene", entity_id=scene.id,
        )

    db.refresh(shot)
    return shot


def _sync_scene_schedule(db: Session, scene: models.Scene) -> None:
    # Shots with their own days keep their events even when the scene has none
    run_sync(
        db, "schedule.reconcile",
        ScheduleSyncService(db).reconcile, scene.id, list(scene.shooting_day_ids or []),
        project_id=scene.project_id, entity_kind="scene", entity_id=scene.id,
    )
