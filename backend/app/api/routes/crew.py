from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.dependencies import VIEWER_ROLES, ensure_project_role, get_current_user_id, get_db, get_or_404
from app import models, schemas
from app.models.budget import LinkKind
from app.services.budget.budget_sync import BudgetSyncService
from app.services.sync_log import run_sync

router = APIRouter(prefix="/crew", tags=["crew"])


@router.post("/", response_model=schemas.CrewMember, status_code=status.HTTP_201_CREATED)
def create_crew_member(
    member_in: schemas.CrewMemberCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    get_or_404(db, models.Project, member_in.project_id, "Project")
    ensure_project_role(db, member_in.project_id, user_id)

    member = models.CrewMember(**member_in.model_dump())
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


@router.get("/project/{project_id}", response_model=List[schemas.CrewMember])
def list_crew_for_project(
    project_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    ensure_project_role(db, project_id, user_id, VIEWER_ROLES)
    return (
        db.query(models.CrewMember)
        .filter(models.CrewMember.project_id == project_id)
        .order_by(models.CrewMember.name)
        .all()
    )


@router.patch("/{member_id}", response_model=schemas.CrewMember)
def update_crew_member(
    member_id: str,
    member_in: schemas.CrewMemberUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    member = get_or_404(db, models.CrewMember, member_id, "Crew member")
    ensure_project_role(db, member.project_id, user_id)

    data = member_in.model_dump(exclude_unset=True)
    for field, value in data.items():
        setattr(member, field, value)
    db.add(member)
    db.commit()
    db.refresh(member)

    # Don't fail the update if budget sync fails
    run_sync(
        db, "budget.sync_on_update",
        BudgetSyncService(db).sync_on_update, LinkKind.crew, member_id, data,
        project_id=member.project_id, entity_kind=LinkKind.crew.value, entity_id=member_id,
    )
    db.refresh(member)
    return member


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_crew_member(
    member_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    member = get_or_404(db, models.CrewMember, member_id, "Crew member")
    project_id = member.project_id
    ensure_project_role(db, project_id, user_id)

    db.delete(member)
    db.commit()

    # Unlink rather than delete budget items, to preserve budget history
    run_sync(
        db, "budget.unlink_on_delete",
        BudgetSyncService(db).unlink_on_delete, LinkKind.crew, member_id,
        project_id=project_id, entity_kind=LinkKind.crew.value, entity_id=member_id,
    )
