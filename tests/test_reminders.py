"""Tests for the reminder engine."""

from datetime import date, datetime, timedelta, timezone

import pytest

from anagrafica.application import Tier, has_critical, reminders
from anagrafica.domain import Document, DocumentType, Person

AS_OF = date(2024, 6, 1)
T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _doc(doc_id: int, person_id: int, days: int | None) -> Document:
    return Document(
        id=doc_id,
        person_id=person_id,
        name=f"doc-{doc_id}",
        type=DocumentType.PASSPORT,
        upload_date=T0,
        expiry_date=AS_OF + timedelta(days=days) if days is not None else None,
    )


def _person(person_id: int, first: str, last: str, *docs: Document) -> Person:
    return Person(
        id=person_id,
        first_name=first,
        last_name=last,
        created_at=T0,
        updated_at=T0,
        documents=docs,
    )


def _snapshot() -> tuple[Person, ...]:
    return (
        _person(1, "Mario", "Rossi", _doc(1, 1, 40), _doc(2, 1, None), _doc(3, 1, -2)),
        _person(2, "Giulia", "Bianchi", _doc(4, 2, 3), _doc(5, 2, 61), _doc(6, 2, 60)),
        _person(3, "Luca", "Verdi", _doc(7, 3, 0), _doc(8, 3, 12)),
    )


def test_window_is_inclusive_and_ordered_by_urgency() -> None:
    items = reminders(_snapshot(), 60, AS_OF)
    assert [i.document.id for i in items] == [7, 4, 8, 1, 6]
    assert [i.days_to_expiry for i in items] == [0, 3, 12, 40, 60]
    assert [i.tier for i in items] == [
        Tier.CRITICAL,
        Tier.CRITICAL,
        Tier.HIGH,
        Tier.LOW,
        Tier.LOW,
    ]


def test_items_carry_owner_full_name() -> None:
    items = reminders(_snapshot(), 5, AS_OF)
    assert [(i.document.id, i.owner_full_name) for i in items] == [
        (7, "Luca Verdi"),
        (4, "Giulia Bianchi"),
    ]


def test_include_expired_widens_window() -> None:
    items = reminders(_snapshot(), 5, AS_OF, include_expired=True)
    assert [i.document.id for i in items] == [3, 7, 4]
    assert items[0].days_to_expiry == -2


def test_default_horizon_is_sixty_days() -> None:
    assert [i.document.id for i in reminders(_snapshot(), as_of=AS_OF)] == [7, 4, 8, 1, 6]


def test_negative_horizon_rejected() -> None:
    with pytest.raises(ValueError):
        reminders(_snapshot(), -1, AS_OF)


def test_has_critical() -> None:
    assert has_critical(reminders(_snapshot(), 60, AS_OF))
    assert not has_critical(reminders(_snapshot(), 60, AS_OF + timedelta(days=20)))
    assert not has_critical([])
