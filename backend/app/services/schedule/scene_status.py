import logging
from typing import Optional

from sqlalchemy.orm import Session

from app import models
from app.services.errors import NotFoundError
from app.services.store import EntityStore

logger = logging.getLogger(__name__)


def derive_scene_status(shot_statuses) -> Optional[str]:
    """Scene status implied by its shots' statuses, or None when there are no shots."""
    statuses = list(shot_statuses)
    if not statuses:
        return None
    completed = sum(1 for s in statuses if s == "completed")
    if completed == len(statuses):
        return "completed"
    if completed or any(s == "in-progress" for s in statuses):
        return "in-progress"
    return "not-shot"


def update_scene_status(db: Session, scene_id: str) -> Optional[str]:
    store = EntityStore(db)
    scene = store.get(models.Scene, scene_id)
    if scene is None:
        raise NotFoundError("Scene", scene_id)

    status = derive_scene_status(s.status for s in store.query(models.Shot, scene_id=scene_id))
    if status is None:
        # No shots yet; keep whatever the scene says
        return scene.status

    if status != scene.status:
        logger.info("Scene %s status %s -> %s", scene_id, scene.status, status)
        store.update(scene, status=status)
    return status
