from typing import Iterable, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from app import models
from app.db.session import SessionLocal

# Roles allowed to change a project's data
EDITOR_ROLES = ("owner", "admin")
# Roles allowed to read scheduling data (conflicts, call sheets)
VIEWER_ROLES = ("owner", "admin", "dept_head", "member")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    # Authentication happens upstream; we only need the caller's id
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing X-User-Id header")
    return x_user_id


def ensure_project_role(
    db: Session,
    project_id: str,
    user_id: str,
    roles: Iterable[str] = EDITOR_ROLES,
) -> models.ProjectMember:
    member = (
        db.query(models.ProjectMember)
        .filter(
            models.ProjectMember.project_id == project_id,
            models.ProjectMember.user_id == user_id,
        )
        .first()
    )
    if not member or member.role not in roles:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient project permissions")
    return member


def get_or_404(db: Session, model, entity_id: str, label: str):
    obj = db.get(model, entity_id)
    if obj is None:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return obj
