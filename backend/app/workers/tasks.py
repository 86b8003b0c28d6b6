# app/workers/tasks.py

import logging

from app.db.session import SessionLocal
from app.services.schedule.schedule_sync import ScheduleSyncService
from app.services import sync_log
from app.models.sync_log import SyncStatus

logger = logging.getLogger(__name__)


def reconcile_project_task(project_id: str) -> dict:
    """
    RQ worker task: operator-triggered bulk schedule repair for one project.
    Opens its own session; per-scene failures end up in the summary.
    """
    db = SessionLocal()

    try:
        summary = ScheduleSyncService(db).reconcile_all(project_id)
        status = SyncStatus.failed if summary.errors else SyncStatus.ok
        sync_log.record(
            db,
            "schedule.reconcile_all",
            status,
            project_id=project_id,
            entity_kind="project",
            entity_id=project_id,
            error="; ".join(summary.errors) or None,
        )
        return {
            "synced": summary.synced,
            "skipped": summary.skipped,
            "errors": summary.errors,
        }

    except Exception:
        db.rollback()
        logger.exception("[SYNC ERROR] Bulk schedule sync failed for project %s", project_id)
        raise
    finally:
        db.close()
