"""
Link registry: which source-entity fields are mirrored into linked budget items.

A budget item links to at most one source entity through the
(`linked_kind`, `linked_id`) pair. Each kind declares the fields that feed
the item's description and the rate fields that feed its amount, so
adding a linkable kind is a new row in LINKS.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from app import models
from app.models.budget import LinkKind
from app.services.errors import ValidationError
from app.services.store import EntityStore


@dataclass(frozen=True)
class RateField:
    """A source field that sets an item's unit rate when the item's unit matches."""
    field: str
    unit_keyword: Optional[str] = None  # None: any unit
    applies_without_unit: bool = True

    def applies_to(self, unit: Optional[str]) -> bool:
        if self.unit_keyword is None:
            return True
        if not unit:
            return self.applies_without_unit
        return self.unit_keyword in unit.lower()


@dataclass(frozen=True)
class LinkSpec:
    kind: LinkKind
    model: type
    description_fields: Tuple[str, ...]
    describe: Callable[[Dict[str, Any]], Optional[str]]
    rate_fields: Tuple[RateField, ...]
    # Source field a budget item's unit_rate is written back to
    reverse_rate_field: str

    def mirrored_fields(self) -> Tuple[str, ...]:
        return self.description_fields + tuple(r.field for r in self.rate_fields)


def _describe_cast(values: Dict[str, Any]) -> Optional[str]:
    actor = values.get("actor_name")
    character = values.get("character_name")
    if actor and character:
        return f"{actor} as {character}"
    return actor or character


def _describe_crew(values: Dict[str, Any]) -> Optional[str]:
    name = values.get("name")
    role = values.get("role")
    if name and role:
        return f"{name} - {role}"
    return name or role


def _describe_by_name(values: Dict[str, Any]) -> Optional[str]:
    return values.get("name")


LINKS: Dict[LinkKind, LinkSpec] = {
    LinkKind.cast: LinkSpec(
        kind=LinkKind.cast,
        model=models.CastMember,
        description_fields=("actor_name", "character_name"),
        describe=_describe_cast,
        rate_fields=(RateField("rate"),),
        reverse_rate_field="rate",
    ),
    LinkKind.crew: LinkSpec(
        kind=LinkKind.crew,
        model=models.CrewMember,
        description_fields=("name", "role"),
        describe=_describe_crew,
        rate_fields=(RateField("rate"),),
        reverse_rate_field="rate",
    ),
    LinkKind.equipment: LinkSpec(
        kind=LinkKind.equipment,
        model=models.Equipment,
        description_fields=("name",),
        describe=_describe_by_name,
        rate_fields=(
            RateField("daily_rate", unit_keyword="day"),
            RateField("weekly_rate", unit_keyword="week", applies_without_unit=False),
        ),
        reverse_rate_field="daily_rate",
    ),
    LinkKind.location: LinkSpec(
        kind=LinkKind.location,
        model=models.Location,
        description_fields=("name",),
        describe=_describe_by_name,
        rate_fields=(RateField("rental_cost"),),
        reverse_rate_field="rental_cost",
    ),
}


def coerce_kind(kind: Union[LinkKind, str]) -> LinkKind:
    try:
        return LinkKind(kind)
    except ValueError:
        raise ValidationError(f"Unknown link kind: {kind!r}", field="kind")


def get_link_spec(kind: Union[LinkKind, str]) -> LinkSpec:
    return LINKS[coerce_kind(kind)]


def find_linked(store: EntityStore, kind: Union[LinkKind, str], entity_id: str) -> List[models.BudgetItem]:
    """Budget items linked to (kind, entity_id). Empty when nothing is linked."""
    return store.query(models.BudgetItem, linked_kind=coerce_kind(kind), linked_id=entity_id)
