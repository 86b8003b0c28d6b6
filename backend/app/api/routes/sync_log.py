from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.dependencies import ensure_project_role, get_current_user_id, get_db
from app import schemas
from app.models.sync_log import SyncStatus
from app.services import sync_log

router = APIRouter(prefix="/sync-log", tags=["sync-log"])


@router.get("/project/{project_id}", response_model=List[schemas.SyncLogEntry])
def list_sync_log(
    project_id: str,
    status: Optional[SyncStatus] = None,
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    ensure_project_role(db, project_id, user_id)
    return sync_log.list_entries(db, project_id, status=status, limit=limit)
