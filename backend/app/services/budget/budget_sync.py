"""
Budget sync: keep linked budget items in step with their source entity.

Forward sync mirrors a source entity's name/rate edits into every linked
item; unlink severs links when the source is deleted. Neither ever deletes
an item or touches its actual amount. Both run after the primary write has
already succeeded, so item-level failures are logged and counted rather
than raised.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from sqlalchemy.orm import Session

from app import models
from app.models.budget import LinkKind
from app.services.budget.link_registry import LinkSpec, find_linked, get_link_spec
from app.services.store import EntityStore

logger = logging.getLogger(__name__)

# Reverse sync only follows small edits to an item's unit rate
REVERSE_SYNC_TOLERANCE = 0.01


@dataclass
class SyncReport:
    matched: int = 0
    updated: int = 0
    failed: List[str] = field(default_factory=list)


class BudgetSyncService:

    def __init__(self, db: Session):
        self.store = EntityStore(db)

    def sync_on_update(
        self,
        kind: Union[LinkKind, str],
        entity_id: str,
        changed_fields: Dict[str, Any],
    ) -> SyncReport:
        """Apply the mirrored subset of `changed_fields` to every linked item."""
        spec = get_link_spec(kind)
        items = find_linked(self.store, spec.kind, entity_id)
        report = SyncReport(matched=len(items))
        if not items:
            return report

        mirrored = {k: v for k, v in changed_fields.items() if k in spec.mirrored_fields()}
        if not mirrored:
            return report

        description = None
        if any(f in mirrored for f in spec.description_fields):
            description = self._describe(spec, entity_id, mirrored)

        for item in items:
            item_id = item.id
            updates = self._item_updates(spec, item, mirrored, description)
            if not updates:
                continue
            updates["last_synced_at"] = datetime.utcnow()
            try:
                self.store.update(item, **updates)
                report.updated += 1
            except Exception:
                logger.warning(
                    "Budget sync: could not update item %s linked to %s %s",
                    item_id, spec.kind.value, entity_id, exc_info=True,
                )
                report.failed.append(item_id)

        logger.info(
            "Budget sync: %s %s -> %d/%d item(s) updated",
            spec.kind.value, entity_id, report.updated, report.matched,
        )
        return report

    def unlink_on_delete(self, kind: Union[LinkKind, str], entity_id: str) -> SyncReport:
        """Clear the link on every item pointing at a deleted source. Amounts stay as they are."""
        spec = get_link_spec(kind)
        items = find_linked(self.store, spec.kind, entity_id)
        report = SyncReport(matched=len(items))

        for item in items:
            item_id = item.id
            try:
                self.store.update(item, linked_kind=None, linked_id=None)
                report.updated += 1
            except Exception:
                logger.warning(
                    "Budget unlink: could not unlink item %s from %s %s",
                    item_id, spec.kind.value, entity_id, exc_info=True,
                )
                report.failed.append(item_id)

        if items:
            logger.info(
                "Budget unlink: %s %s -> %d item(s) unlinked",
                spec.kind.value, entity_id, report.updated,
            )
        return report

    def sync_source_from_item(self, item: models.BudgetItem) -> bool:
        """
        Write an item's edited unit rate back to its linked source.

        Only rates are reverse-synced, and only when the new rate is within
        1% of the source's current one. Returns True if the source changed.
        """
        if not item.linked_kind or not item.linked_id or not item.unit_rate:
            return False

        spec = get_link_spec(item.linked_kind)
        source = self.store.get(spec.model, item.linked_id)
        if source is None:
            return False

        current = getattr(source, spec.reverse_rate_field)
        if not current or current == item.unit_rate:
            return False
        if abs(current - item.unit_rate) / current >= REVERSE_SYNC_TOLERANCE:
            return False

        self.store.update(source, **{spec.reverse_rate_field: item.unit_rate})
        logger.info(
            "Budget reverse sync: %s %s %s %s -> %s",
            spec.kind.value, item.linked_id, spec.reverse_rate_field, current, item.unit_rate,
        )
        # Sibling items linked to the same source follow the new rate
        self.sync_on_update(spec.kind, item.linked_id, {spec.reverse_rate_field: item.unit_rate})
        return True

    def _describe(self, spec: LinkSpec, entity_id: str, mirrored: Dict[str, Any]) -> Optional[str]:
        # Partial edits (e.g. only character_name) need the other half from the source
        values: Dict[str, Any] = {}
        source = self.store.get(spec.model, entity_id)
        if source is not None:
            values = {f: getattr(source, f) for f in spec.description_fields}
        values.update({f: mirrored[f] for f in spec.description_fields if f in mirrored})
        return spec.describe(values)

    @staticmethod
    def _item_updates(
        spec: LinkSpec,
        item: models.BudgetItem,
        mirrored: Dict[str, Any],
        description: Optional[str],
    ) -> Dict[str, Any]:
        updates: Dict[str, Any] = {}

        if description and description != item.description:
            updates["description"] = description

        for rate_field in spec.rate_fields:
            rate = mirrored.get(rate_field.field)
            if rate is None or not rate_field.applies_to(item.unit):
                continue
            updates["unit_rate"] = rate
            # A zero-quantity line keeps its estimate
            if item.quantity is None or item.quantity:
                updates["estimated_amount"] = rate * (item.quantity or 1)

        return updates
