from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.dependencies import VIEWER_ROLES, ensure_project_role, get_current_user_id, get_db, get_or_404
from app import models, schemas
from app.services.budget.budget_sync import BudgetSyncService
from app.services.budget.link_registry import get_link_spec
from app.services.sync_log import run_sync

router = APIRouter(prefix="/budget", tags=["budget"])


@router.post("/categories", response_model=schemas.BudgetCategory, status_code=status.HTTP_201_CREATED)
def create_category(
    category_in: schemas.BudgetCategoryCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    get_or_404(db, models.Project, category_in.project_id, "Project")
    ensure_project_role(db, category_in.project_id, user_id)

    category = models.BudgetCategory(**category_in.model_dump())
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@router.post("/items", response_model=schemas.BudgetItem, status_code=status.HTTP_201_CREATED)
def create_item(
    item_in: schemas.BudgetItemCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    get_or_404(db, models.Project, item_in.project_id, "Project")
    ensure_project_role(db, item_in.project_id, user_id)

    if (item_in.linked_kind is None) != (item_in.linked_id is None):
        raise HTTPException(status_code=400, detail="linked_kind and linked_id must be set together")
    if item_in.linked_kind is not None:
        source = db.get(get_link_spec(item_in.linked_kind).model, item_in.linked_id)
        if source is None or source.project_id != item_in.project_id:
            raise HTTPException(status_code=400, detail="Linked entity not found in this project")

    item = models.BudgetItem(**item_in.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@router.get("/items/project/{project_id}", response_model=List[schemas.BudgetItem])
def list_items_for_project(
    project_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    ensure_project_role(db, project_id, user_id, VIEWER_ROLES)
    return (
        db.query(models.BudgetItem)
        .filter(models.BudgetItem.project_id == project_id)
        .order_by(models.BudgetItem.created_at)
        .all()
    )


@router.get("/items/{item_id}", response_model=schemas.BudgetItem)
def get_item(
    item_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    item = get_or_404(db, models.BudgetItem, item_id, "Budget item")
    ensure_project_role(db, item.project_id, user_id, VIEWER_ROLES)
    return item


@router.patch("/items/{item_id}", response_model=schemas.BudgetItem)
def update_item(
    item_id: str,
    item_in: schemas.BudgetItemUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    item = get_or_404(db, models.BudgetItem, item_id, "Budget item")
    ensure_project_role(db, item.project_id, user_id)

    data = item_in.model_dump(exclude_unset=True)
    for field, value in data.items():
        setattr(item, field, value)
    db.add(item)
    db.commit()
    db.refresh(item)

    # Small rate corrections flow back to the linked source
    if "unit_rate" in data and item.linked_kind is not None:
        run_sync(
            db, "budget.sync_source_from_item",
            BudgetSyncService(db).sync_source_from_item, item,
            project_id=item.project_id, entity_kind=item.linked_kind.value, entity_id=item.linked_id,
        )
        db.refresh(item)
    return item
