"""Relationship index: both directions of a person's links, derived from a snapshot.

Only the owner stores a relationship. Looking up the target returns the same
row tagged inbound; no reverse row is ever materialized.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from anagrafica.domain import Person, Relationship


class Direction(str, Enum):
    OUTBOUND = "outbound"
    INBOUND = "inbound"


@dataclass(frozen=True)
class RelationshipView:
    relationship: Relationship
    direction: Direction
    counterpart_name: str | None = None

    @property
    def counterpart_id(self) -> int:
        """The person on the other end, seen from the person that was looked up."""
        if self.direction is Direction.OUTBOUND:
            return self.relationship.related_person_id
        return self.relationship.person_id


def relationships_of(snapshot: Iterable[Person], person_id: int) -> list[RelationshipView]:
    """Every relationship where person_id is owner or target, in snapshot order."""
    out = []
    for person in snapshot:
        for rel in person.relationships:
            if rel.person_id == person_id:
                out.append(RelationshipView(rel, Direction.OUTBOUND))
            elif rel.related_person_id == person_id:
                out.append(RelationshipView(rel, Direction.INBOUND))
    return out


def with_counterpart_names(
    views: Iterable[RelationshipView], snapshot: Iterable[Person]
) -> list[RelationshipView]:
    names = {p.id: p.full_name for p in snapshot}
    return [
        RelationshipView(v.relationship, v.direction, names.get(v.counterpart_id))
        for v in views
    ]
