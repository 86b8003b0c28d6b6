from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.dependencies import VIEWER_ROLES, ensure_project_role, get_current_user_id, get_db, get_or_404
from app import models, schemas
from app.core.queue import sync_queue
from app.services.budget.scene_budget import calculate_scene_cost, sync_scene_budget
from app.services.schedule.conflicts import ConflictDetector
from app.services.schedule.schedule_sync import ScheduleSyncService
from app.services.sync_log import run_sync
from app.workers.tasks import reconcile_project_task

router = APIRouter(prefix="/scenes", tags=["scenes"])


@router.post("/", response_model=schemas.Scene, status_code=status.HTTP_201_CREATED)
def create_scene(
    scene_in: schemas.SceneCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    get_or_404(db, models.Project, scene_in.project_id, "Project")
    ensure_project_role(db, scene_in.project_id, user_id)
    _check_location(db, scene_in.project_id, scene_in.location_id)

    scene = models.Scene(**scene_in.model_dump())
    db.add(scene)
    db.commit()
    db.refresh(scene)

    if scene.shooting_day_ids:
        _sync_schedule(db, scene, scene.shooting_day_ids)
    return scene


@router.get("/project/{project_id}", response_model=List[schemas.Scene])
def list_scenes_for_project(
    project_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    ensure_project_role(db, project_id, user_id, VIEWER_ROLES)
    return (
        db.query(models.Scene)
        .filter(models.Scene.project_id == project_id)
        .order_by(models.Scene.created_at)
        .all()
    )


@router.get("/{scene_id}", response_model=schemas.Scene)
def get_scene(
    scene_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    scene = get_or_404(db, models.Scene, scene_id, "Scene")
    ensure_project_role(db, scene.project_id, user_id, VIEWER_ROLES)
    return scene


@router.patch("/{scene_id}", response_model=schemas.Scene)
def update_scene(
    scene_id: str,
    scene_in: schemas.SceneUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    scene = get_or_404(db, models.Scene, scene_id, "Scene")
    ensure_project_role(db, scene.project_id, user_id)

    data = scene_in.model_dump(exclude_unset=True)
    if data.get("location_id"):
        _check_location(db, scene.project_id, data["location_id"])

    old_day_ids = list(scene.shooting_day_ids or [])
    for field, value in data.items():
        setattr(scene, field, value)
    db.add(scene)
    db.commit()
    db.refresh(scene)

    new_day_ids = list(scene.shooting_day_ids or [])
    if sorted(old_day_ids) != sorted(new_day_ids):
        _sync_schedule(db, scene, new_day_ids)
        db.refresh(scene)
    return scene


@router.delete("/{scene_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_scene(
    scene_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    scene = get_or_404(db, models.Scene, scene_id, "Scene")
    ensure_project_role(db, scene.project_id, user_id)

    # Events are keyed by the scene's shots, so clear them while the shots still exist
    run_sync(
        db, "schedule.clear_all",
        ScheduleSyncService(db).clear_all, scene_id,
        project_id=scene.project_id, entity_kind="scene", entity_id=scene_id,
    )

    db.query(models.Shot).filter(models.Shot.scene_id == scene_id).delete(synchronize_session=False)
    db.delete(scene)
    db.commit()


@router.post("/{scene_id}/sync-schedule", response_model=schemas.ReconcileResult)
def sync_scene_to_schedule(
    scene_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    scene = get_or_404(db, models.Scene, scene_id, "Scene")
    ensure_project_role(db, scene.project_id, user_id)

    if not scene.shooting_day_ids:
        raise HTTPException(status_code=400, detail="Scene has no shooting days assigned")

    result = ScheduleSyncService(db).reconcile(scene_id, scene.shooting_day_ids)
    return schemas.ReconcileResult.model_validate(result)


@router.post("/project/{project_id}/sync-schedule", response_model=schemas.ReconcileSummary)
def sync_project_to_schedule(
    project_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    get_or_404(db, models.Project, project_id, "Project")
    ensure_project_role(db, project_id, user_id)

    summary = ScheduleSyncService(db).reconcile_all(project_id)
    message = f"Synced {summary.synced} scene(s) to schedule"
    if summary.skipped:
        message += f", skipped {summary.skipped} scene(s)"
    return schemas.ReconcileSummary(
        synced=summary.synced,
        skipped=summary.skipped,
        errors=summary.errors,
        message=message,
    )


@router.post(
    "/project/{project_id}/sync-schedule/jobs",
    response_model=schemas.SyncJob,
    status_code=status.HTTP_202_ACCEPTED,
)
def enqueue_project_sync(
    project_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    get_or_404(db, models.Project, project_id, "Project")
    ensure_project_role(db, project_id, user_id)

    job = sync_queue.enqueue(reconcile_project_task, project_id)
    return schemas.SyncJob(job_id=job.id, project_id=project_id)


@router.get("/{scene_id}/conflicts", response_model=schemas.Conflicts)
def get_schedule_conflicts(
    scene_id: str,
    project_id: str = Query(...),
    shooting_day_id: Optional[str] = None,
    scheduled_date: Optional[date] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    ensure_project_role(db, project_id, user_id, VIEWER_ROLES)

    conflicts = ConflictDetector(db).detect(
        project_id,
        scene_id,
        shooting_day_id=shooting_day_id,
        scheduled_date=scheduled_date,
    )
    return schemas.Conflicts.model_validate(conflicts)


@router.get("/{scene_id}/cost", response_model=schemas.SceneCost)
def get_scene_cost(
    scene_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    scene = get_or_404(db, models.Scene, scene_id, "Scene")
    ensure_project_role(db, scene.project_id, user_id, VIEWER_ROLES)
    return schemas.SceneCost(scene_id=scene_id, estimated_cost=calculate_scene_cost(db, scene_id))


@router.post("/{scene_id}/budget", response_model=schemas.SceneBudgetResult)
def create_scene_budget(
    scene_id: str,
    category_id: Optional[str] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    scene = get_or_404(db, models.Scene, scene_id, "Scene")
    ensure_project_role(db, scene.project_id, user_id)

    created = sync_scene_budget(db, scene_id, category_id=category_id)
    return schemas.SceneBudgetResult(scene_id=scene_id, created_item_ids=created)


def _check_location(db: Session, project_id: str, location_id: Optional[str]) -> None:
    if not location_id:
        return
    location = db.get(models.Location, location_id)
    if location is None:
        raise HTTPException(status_code=400, detail="Location not found")
    if location.project_id != project_id:
        raise HTTPException(status_code=400, detail="Location does not belong to this project")


def _sync_schedule(db: Session, scene: models.Scene, day_ids: List[str]) -> None:
    """Best-effort schedule sync after a scene write; an empty day list clears the scene."""
    service = ScheduleSyncService(db)
    if day_ids:
        operation, fn, args = "schedule.reconcile", service.reconcile, (scene.id, day_ids)
    else:
        operation, fn, args = "schedule.clear_all", service.clear_all, (scene.id,)

    run_sync(
        db, operation, fn, *args,
        project_id=scene.project_id, entity_kind="scene", entity_id=scene.id,
    )
