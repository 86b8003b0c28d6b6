"""Scene-level budget helpers: estimate a scene's cost and seed linked budget lines for it."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app import models
from app.models.budget import LinkKind
from app.services.budget.link_registry import get_link_spec
from app.services.errors import NotFoundError, ValidationError
from app.services.store import EntityStore

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 8
DEFAULT_CATEGORY = "Production"

_CREW_UNITS = {"hourly": "hours", "weekly": "weeks"}


def calculate_scene_cost(db: Session, scene_id: str) -> float:
    """Rough one-day cost of a scene from its cast, crew and equipment rates."""
    store = EntityStore(db)
    scene = store.get(models.Scene, scene_id)
    if scene is None:
        raise NotFoundError("Scene", scene_id)

    total = 0.0
    for cast_id in scene.cast_ids or []:
        member = store.get(models.CastMember, cast_id)
        if member is not None:
            total += member.rate or 0

    for crew_id in scene.crew_ids or []:
        member = store.get(models.CrewMember, crew_id)
        if member is None:
            continue
        rate = member.rate or 0
        total += rate * HOURS_PER_DAY if member.rate_type == "hourly" else rate

    for equipment_id in scene.equipment_ids or []:
        item = store.get(models.Equipment, equipment_id)
        if item is not None:
            total += item.daily_rate or 0

    return total


def sync_scene_budget(db: Session, scene_id: str, category_id: Optional[str] = None) -> List[str]:
    """
    Create one linked budget line per cast/crew/equipment assignment of a scene.

    Lines already present for the same (kind, source, scene) are left alone,
    so running this twice creates nothing new. Returns the created item ids.
    """
    store = EntityStore(db)
    scene = store.get(models.Scene, scene_id)
    if scene is None:
        raise NotFoundError("Scene", scene_id)

    category = _resolve_category(store, scene.project_id, category_id)
    created: List[str] = []

    for cast_id in scene.cast_ids or []:
        member = store.get(models.CastMember, cast_id)
        if member is None:
            continue
        base = get_link_spec(LinkKind.cast).describe(
            {"actor_name": member.actor_name, "character_name": member.character_name}
        )
        rate = member.rate or 0
        item = _create_line(
            store, scene, category, LinkKind.cast, cast_id,
            description=f"{base} - Scene {scene.scene_number}",
            unit="days", rate=rate, vendor=member.agent,
        )
        if item is not None:
            created.append(item.id)

    for crew_id in scene.crew_ids or []:
        member = store.get(models.CrewMember, crew_id)
        if member is None:
            continue
        base = get_link_spec(LinkKind.crew).describe({"name": member.name, "role": member.role})
        item = _create_line(
            store, scene, category, LinkKind.crew, crew_id,
            description=f"{base} - Scene {scene.scene_number}",
            unit=_CREW_UNITS.get(member.rate_type, "days"), rate=member.rate or 0,
        )
        if item is not None:
            created.append(item.id)

    for equipment_id in scene.equipment_ids or []:
        equipment = store.get(models.Equipment, equipment_id)
        if equipment is None or not equipment.daily_rate:
            continue
        item = _create_line(
            store, scene, category, LinkKind.equipment, equipment_id,
            description=f"{equipment.name} - Scene {scene.scene_number}",
            unit="days", rate=equipment.daily_rate, vendor=equipment.rental_vendor,
        )
        if item is not None:
            created.append(item.id)

    logger.info("Scene budget: scene %s -> %d new item(s)", scene_id, len(created))
    return created


def _resolve_category(store: EntityStore, project_id: str, category_id: Optional[str]) -> models.BudgetCategory:
    if category_id:
        category = store.get(models.BudgetCategory, category_id)
        if category is None or category.project_id != project_id:
            raise ValidationError("Budget category does not belong to this project", field="category_id")
        return category

    category = store.first(models.BudgetCategory, project_id=project_id, name=DEFAULT_CATEGORY)
    if category is None:
        category = store.create(
            models.BudgetCategory,
            project_id=project_id,
            name=DEFAULT_CATEGORY,
            department="production",
            phase="production",
        )
    return category


def _create_line(
    store: EntityStore,
    scene: models.Scene,
    category: models.BudgetCategory,
    kind: LinkKind,
    source_id: str,
    description: str,
    unit: str,
    rate: float,
    vendor: Optional[str] = None,
) -> Optional[models.BudgetItem]:
    existing = store.first(
        models.BudgetItem,
        project_id=scene.project_id,
        linked_kind=kind,
        linked_id=source_id,
        linked_scene_id=scene.id,
    )
    if existing is not None:
        return None

    return store.create(
        models.BudgetItem,
        project_id=scene.project_id,
        category_id=category.id,
        description=description,
        estimated_amount=rate,
        actual_amount=0,
        unit=unit,
        quantity=1,
        unit_rate=rate,
        status="estimated",
        vendor=vendor,
        phase="production",
        linked_kind=kind,
        linked_id=source_id,
        linked_scene_id=scene.id,
    )
