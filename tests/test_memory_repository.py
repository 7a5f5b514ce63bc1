"""Tests for InMemoryPersonRepository: ordering, owner indices, id invariants."""

from datetime import datetime, timezone

import pytest

from anagrafica.domain import Document, DocumentType, Person
from anagrafica.infrastructure import InMemoryPersonRepository

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _person(person_id: int, *doc_ids: int) -> Person:
    return Person(
        id=person_id,
        first_name="P",
        last_name=str(person_id),
        created_at=T0,
        updated_at=T0,
        documents=tuple(
            Document(id=d, person_id=person_id, name="d", type=DocumentType.OTHER, upload_date=T0)
            for d in doc_ids
        ),
    )


def test_counters_are_independent_and_increasing() -> None:
    repo = InMemoryPersonRepository()
    assert [repo.next_person_id() for _ in range(3)] == [1, 2, 3]
    assert repo.next_document_id() == 1
    assert repo.next_relationship_id() == 1


def test_add_list_remove_preserves_order() -> None:
    repo = InMemoryPersonRepository()
    for pid in (1, 2, 3):
        repo.add(_person(pid))
    assert repo.remove(2).id == 2
    assert [p.id for p in repo.list_all()] == [1, 3]
    assert repo.remove(2) is None


def test_duplicate_person_id_is_an_invariant_violation() -> None:
    repo = InMemoryPersonRepository()
    repo.add(_person(1))
    with pytest.raises(RuntimeError):
        repo.add(_person(1))


def test_document_owner_index_follows_writes() -> None:
    repo = InMemoryPersonRepository()
    repo.add(_person(1, 10, 11))
    assert repo.document_owner(10) == 1
    assert repo.replace(_person(1, 11))
    assert repo.document_owner(10) is None
    assert repo.document_owner(11) == 1
    repo.remove(1)
    assert repo.document_owner(11) is None


def test_document_id_shared_across_persons_rejected() -> None:
    repo = InMemoryPersonRepository()
    repo.add(_person(1, 10))
    with pytest.raises(RuntimeError):
        repo.add(_person(2, 10))
    repo.add(_person(2))
    with pytest.raises(RuntimeError):
        repo.replace(_person(2, 10))
    assert repo.get_by_id(2).documents == ()
    assert repo.document_owner(10) == 1


def test_replace_unknown_person_returns_false() -> None:
    assert InMemoryPersonRepository().replace(_person(5)) is False
