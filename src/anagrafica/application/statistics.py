"""Aggregate counts over a snapshot: documents, relationships, age brackets."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from anagrafica.domain import Person

AGE_BRACKETS: tuple[tuple[str, int | None], ...] = (
    ("0-18", 18),
    ("19-35", 35),
    ("36-50", 50),
    ("51-65", 65),
    ("65+", None),
)


@dataclass(frozen=True)
class Statistics:
    total_persons: int = 0
    total_documents: int = 0
    total_relationships: int = 0
    documents_by_type: dict[str, int] = field(default_factory=dict)
    relationships_by_type: dict[str, int] = field(default_factory=dict)
    age_groups: dict[str, int] = field(default_factory=dict)


def age_on(birth: date, as_of: date) -> int:
    """Completed years between birth and as_of."""
    age = as_of.year - birth.year
    if (as_of.month, as_of.day) < (birth.month, birth.day):
        age -= 1
    return age


def age_bracket(age: int) -> str:
    for label, upper in AGE_BRACKETS:
        if upper is None or age <= upper:
            return label
    raise AssertionError("unreachable: last bracket is open-ended")


def aggregate(persons: Iterable[Person], as_of: date) -> Statistics:
    """Counts per document type, relationship type (owner side only) and age bracket."""
    total_persons = 0
    total_documents = 0
    total_relationships = 0
    documents_by_type: dict[str, int] = {}
    relationships_by_type: dict[str, int] = {}
    age_groups = {label: 0 for label, _ in AGE_BRACKETS}

    for person in persons:
        total_persons += 1
        total_documents += len(person.documents)
        for doc in person.documents:
            key = doc.type.value
            documents_by_type[key] = documents_by_type.get(key, 0) + 1
        total_relationships += len(person.relationships)
        for rel in person.relationships:
            key = rel.relationship_type.value
            relationships_by_type[key] = relationships_by_type.get(key, 0) + 1
        if person.date_of_birth is not None:
            age_groups[age_bracket(age_on(person.date_of_birth, as_of))] += 1

    return Statistics(
        total_persons=total_persons,
        total_documents=total_documents,
        total_relationships=total_relationships,
        documents_by_type=documents_by_type,
        relationships_by_type=relationships_by_type,
        age_groups=age_groups,
    )
