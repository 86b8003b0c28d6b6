from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.dependencies import (
    EDITOR_ROLES,
    VIEWER_ROLES,
    ensure_project_role,
    get_current_user_id,
    get_db,
    get_or_404,
)
from app import models, schemas

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("/", response_model=schemas.Project, status_code=status.HTTP_201_CREATED)
def create_project(
    project_in: schemas.ProjectCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    project = models.Project(
        name=project_in.name,
        description=project_in.description,
    )
    db.add(project)
    db.flush()

    # Creator owns the project
    db.add(models.ProjectMember(project_id=project.id, user_id=user_id, role="owner"))
    db.commit()
    db.refresh(project)
    return project


@router.get("/{project_id}", response_model=schemas.Project)
def get_project(
    project_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    project = get_or_404(db, models.Project, project_id, "Project")
    ensure_project_role(db, project_id, user_id, VIEWER_ROLES)
    return project


@router.post(
    "/{project_id}/members",
    response_model=schemas.ProjectMember,
    status_code=status.HTTP_201_CREATED,
)
def add_member(
    project_id: str,
    member_in: schemas.ProjectMemberCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    get_or_404(db, models.Project, project_id, "Project")
    ensure_project_role(db, project_id, user_id, EDITOR_ROLES)

    member = models.ProjectMember(
        project_id=project_id,
        user_id=member_in.user_id,
        role=member_in.role,
    )
    db.add(member)
    db.commit()
    db.refresh(member)
    return member
