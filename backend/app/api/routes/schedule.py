from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.dependencies import VIEWER_ROLES, ensure_project_role, get_current_user_id, get_db, get_or_404
from app import models, schemas
from app.services.schedule.call_sheet import generate_call_sheet

router = APIRouter(prefix="/schedule", tags=["schedule"])


@router.post("/days", response_model=schemas.ShootingDay, status_code=status.HTTP_201_CREATED)
def create_shooting_day(
    day_in: schemas.ShootingDayCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    get_or_404(db, models.Project, day_in.project_id, "Project")
    ensure_project_role(db, day_in.project_id, user_id)

    day = models.ShootingDay(**day_in.model_dump())
    db.add(day)
    db.commit()
    db.refresh(day)
    return day


@router.get("/days/project/{project_id}", response_model=List[schemas.ShootingDay])
def list_shooting_days(
    project_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    ensure_project_role(db, project_id, user_id, VIEWER_ROLES)
    return (
        db.query(models.ShootingDay)
        .filter(models.ShootingDay.project_id == project_id)
        .order_by(models.ShootingDay.date)
        .all()
    )


@router.get("/days/{day_id}/events", response_model=List[schemas.ScheduleEvent])
def list_events_for_day(
    day_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    day = get_or_404(db, models.ShootingDay, day_id, "Shooting day")
    ensure_project_role(db, day.project_id, user_id, VIEWER_ROLES)
    return (
        db.query(models.ScheduleEvent)
        .filter(models.ScheduleEvent.shooting_day_id == day_id)
        .order_by(models.ScheduleEvent.order)
        .all()
    )


@router.get("/days/{day_id}/call-sheet", response_model=schemas.CallSheet)
def get_call_sheet(
    day_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    day = get_or_404(db, models.ShootingDay, day_id, "Shooting day")
    ensure_project_role(db, day.project_id, user_id, VIEWER_ROLES)
    sheet = generate_call_sheet(db, day.project_id, day_id)
    return schemas.CallSheet.model_validate(sheet)
