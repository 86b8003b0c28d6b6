"""
Sync runner and drift log.

Secondary passes (budget sync, schedule sync, scene status) run after the
primary write has been committed. `run_sync` executes one such pass, never
lets its failure reach the caller, and records the outcome in the sync log
so stale derived data can be found and repaired later.
"""

import logging
from typing import Any, Callable, List, Optional

from sqlalchemy.orm import Session

from app import models
from app.models.sync_log import SyncStatus

logger = logging.getLogger(__name__)


def run_sync(
    db: Session,
    operation: str,
    fn: Callable[..., Any],
    *args: Any,
    project_id: Optional[str] = None,
    entity_kind: Optional[str] = None,
    entity_id: Optional[str] = None,
    **kwargs: Any,
) -> Optional[Any]:
    """Run a best-effort sync pass. Returns its result, or None if it failed."""
    try:
        result = fn(*args, **kwargs)
    except Exception as exc:
        db.rollback()
        logger.warning(
            "%s failed for %s %s; derived data is now stale",
            operation, entity_kind, entity_id, exc_info=True,
        )
        record(db, operation, SyncStatus.failed, project_id, entity_kind, entity_id, error=str(exc))
        return None

    failed = getattr(result, "failed", None)
    if failed:
        logger.warning("%s left %d item(s) stale for %s %s", operation, len(failed), entity_kind, entity_id)
        record(
            db, operation, SyncStatus.failed, project_id, entity_kind, entity_id,
            error=f"{len(failed)} item(s) not synced: {', '.join(failed)}",
        )
    else:
        record(db, operation, SyncStatus.ok, project_id, entity_kind, entity_id)
    return result


def record(
    db: Session,
    operation: str,
    status: SyncStatus,
    project_id: Optional[str] = None,
    entity_kind: Optional[str] = None,
    entity_id: Optional[str] = None,
    error: Optional[str] = None,
) -> None:
    entry = models.SyncLogEntry(
        project_id=project_id,
        operation=operation,
        entity_kind=entity_kind,
        entity_id=entity_id,
        status=status,
        error=error,
    )
    try:
        db.add(entry)
        db.commit()
    except Exception:
        db.rollback()
        logger.error("Could not write sync log entry for %s %s", operation, entity_id, exc_info=True)


def list_entries(
    db: Session,
    project_id: str,
    status: Optional[SyncStatus] = None,
    limit: int = 100,
) -> List[models.SyncLogEntry]:
    query = db.query(models.SyncLogEntry).filter(models.SyncLogEntry.project_id == project_id)
    if status is not None:
        query = query.filter(models.SyncLogEntry.status == status)
    return query.order_by(models.SyncLogEntry.created_at.desc()).limit(limit).all()
