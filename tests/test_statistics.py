"""Tests for the statistics aggregator."""

from datetime import date, datetime, timezone

from anagrafica.application import aggregate, age_on
from anagrafica.domain import Document, DocumentType, Person, Relationship, RelationshipType

AS_OF = date(2024, 6, 1)
T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _person(person_id: int, birth: date | None = None, documents=(), relationships=()) -> Person:
    return Person(
        id=person_id,
        first_name=f"P{person_id}",
        last_name="Test",
        date_of_birth=birth,
        documents=documents,
        relationships=relationships,
        created_at=T0,
        updated_at=T0,
    )


def _doc(doc_id: int, person_id: int, doc_type: DocumentType) -> Document:
    return Document(id=doc_id, person_id=person_id, name="d", type=doc_type, upload_date=T0)


def _rel(rel_id: int, owner: int, target: int, rel_type: RelationshipType) -> Relationship:
    return Relationship(
        id=rel_id,
        person_id=owner,
        related_person_id=target,
        relationship_type=rel_type,
        created_at=T0,
        updated_at=T0,
    )


def test_age_counts_completed_years() -> None:
    assert age_on(date(1990, 6, 1), AS_OF) == 34
    assert age_on(date(1990, 6, 2), AS_OF) == 33
    assert age_on(date(1990, 7, 1), AS_OF) == 33
    assert age_on(date(1990, 5, 31), AS_OF) == 34


def test_age_brackets_for_ten_forty_seventy() -> None:
    persons = [
        _person(1, date(2014, 1, 1)),
        _person(2, date(1984, 1, 1)),
        _person(3, date(1954, 1, 1)),
        _person(4),
    ]
    stats = aggregate(persons, AS_OF)
    assert stats.age_groups == {"0-18": 1, "19-35": 0, "36-50": 1, "51-65": 0, "65+": 1}
    assert stats.total_persons == 4


def test_bracket_edges() -> None:
    persons = [
        _person(1, date(2006, 6, 1)),  # 18
        _person(2, date(2005, 6, 1)),  # 19
        _person(3, date(1959, 6, 1)),  # 65
        _person(4, date(1958, 6, 1)),  # 66
    ]
    stats = aggregate(persons, AS_OF)
    assert stats.age_groups == {"0-18": 1, "19-35": 1, "36-50": 0, "51-65": 1, "65+": 1}


def test_counts_documents_and_relationships_from_owner_side_only() -> None:
    persons = [
        _person(
            1,
            documents=(
                _doc(1, 1, DocumentType.PASSPORT),
                _doc(2, 1, DocumentType.INVOICE),
            ),
            relationships=(_rel(1, 1, 2, RelationshipType.CLIENT),),
        ),
        _person(
            2,
            documents=(_doc(3, 2, DocumentType.PASSPORT),),
            relationships=(
                _rel(2, 2, 1, RelationshipType.SUPPLIER),
                _rel(3, 2, 1, RelationshipType.FRIEND),
            ),
        ),
    ]
    stats = aggregate(persons, AS_OF)
    assert stats.total_documents == 3
    assert stats.documents_by_type == {"passport": 2, "invoice": 1}
    assert stats.total_relationships == 3
    assert stats.relationships_by_type == {"client": 1, "supplier": 1, "friend": 1}


def test_empty_snapshot() -> None:
    stats = aggregate([], AS_OF)
    assert stats.total_persons == 0
    assert stats.total_documents == 0
    assert stats.documents_by_type == {}
    assert sum(stats.age_groups.values()) == 0
