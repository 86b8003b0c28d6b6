from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.dependencies import VIEWER_ROLES, ensure_project_role, get_current_user_id, get_db, get_or_404
from app import models, schemas
from app.models.budget import LinkKind
from app.services.budget.budget_sync import BudgetSyncService
from app.services.sync_log import run_sync

router = APIRouter(prefix="/locations", tags=["locations"])


@router.post("/", response_model=schemas.Location, status_code=status.HTTP_201_CREATED)
def create_location(
    location_in: schemas.LocationCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    get_or_404(db, models.Project, location_in.project_id, "Project")
    ensure_project_role(db, location_in.project_id, user_id)

    location = models.Location(**location_in.model_dump())
    db.add(location)
    db.commit()
    db.refresh(location)
    return location


@router.get("/project/{project_id}", response_model=List[schemas.Location])
def list_locations_for_project(
    project_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    ensure_project_role(db, project_id, user_id, VIEWER_ROLES)
    return (
        db.query(models.Location)
        .filter(models.Location.project_id == project_id)
        .order_by(models.Location.name)
        .all()
    )


@router.patch("/{location_id}", response_model=schemas.Location)
def update_location(
    location_id: str,
    location_in: schemas.LocationUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    location = get_or_404(db, models.Location, location_id, "Location")
    ensure_project_role(db, location.project_id, user_id)

    data = location_in.model_dump(exclude_unset=True)
    for field, value in data.items():
        setattr(location, field, value)
    db.add(location)
    db.commit()
    db.refresh(location)

    # Don't fail the update if budget sync fails
    run_sync(
        db, "budget.sync_on_update",
        BudgetSyncService(db).sync_on_update, LinkKind.location, location_id, data,
        project_id=location.project_id, entity_kind=LinkKind.location.value, entity_id=location_id,
    )
    db.refresh(location)
    return location


@router.delete("/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_location(
    location_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    location = get_or_404(db, models.Location, location_id, "Location")
    project_id = location.project_id
    ensure_project_role(db, project_id, user_id)

    db.delete(location)
    db.commit()

    # Unlink rather than delete budget items, to preserve budget history
    run_sync(
        db, "budget.unlink_on_delete",
        BudgetSyncService(db).unlink_on_delete, LinkKind.location, location_id,
        project_id=project_id, entity_kind=LinkKind.location.value, entity_id=location_id,
    )
