from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.dependencies import VIEWER_ROLES, ensure_project_role, get_current_user_id, get_db, get_or_404
from app import models, schemas
from app.models.budget import LinkKind
from app.services.budget.budget_sync import BudgetSyncService
from app.services.sync_log import run_sync

router = APIRouter(prefix="/equipment", tags=["equipment"])


@router.post("/", response_model=schemas.Equipment, status_code=status.HTTP_201_CREATED)
def create_equipment(
    equipment_in: schemas.EquipmentCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    get_or_404(db, models.Project, equipment_in.project_id, "Project")
    ensure_project_role(db, equipment_in.project_id, user_id)

    equipment = models.Equipment(**equipment_in.model_dump())
    db.add(equipment)
    db.commit()
    db.refresh(equipment)
    return equipment


@router.get("/project/{project_id}", response_model=List[schemas.Equipment])
def list_equipment_for_project(
    project_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    ensure_project_role(db, project_id, user_id, VIEWER_ROLES)
    return (
        db.query(models.Equipment)
        .filter(models.Equipment.project_id == project_id)
        .order_by(models.Equipment.name)
        .all()
    )


@router.patch("/{equipment_id}", response_model=schemas.Equipment)
def update_equipment(
    equipment_id: str,
    equipment_in: schemas.EquipmentUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    equipment = get_or_404(db, models.Equipment, equipment_id, "Equipment")
    ensure_project_role(db, equipment.project_id, user_id)

    data = equipment_in.model_dump(exclude_unset=True)
    for field, value in data.items():
        setattr(equipment, field, value)
    db.add(equipment)
    db.commit()
    db.refresh(equipment)

    # Don't fail the update if budget sync fails
    run_sync(
        db, "budget.sync_on_update",
        BudgetSyncService(db).sync_on_update, LinkKind.equipment, equipment_id, data,
        project_id=equipment.project_id, entity_kind=LinkKind.equipment.value, entity_id=equipment_id,
    )
    db.refresh(equipment)
    return equipment


@router.delete("/{equipment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_equipment(
    equipment_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    equipment = get_or_404(db, models.Equipment, equipment_id, "Equipment")
    project_id = equipment.project_id
    ensure_project_role(db, project_id, user_id)

    db.delete(equipment)
    db.commit()

    # Unlink rather than delete budget items, to preserve budget history
    run_sync(
        db, "budget.unlink_on_delete",
        BudgetSyncService(db).unlink_on_delete, LinkKind.equipment, equipment_id,
        project_id=project_id, entity_kind=LinkKind.equipment.value, entity_id=equipment_id,
    )
