"""In-memory implementation of PersonRepository (no DB)."""

import itertools

from anagrafica.domain import Person


class InMemoryPersonRepository:
    """Stores persons in memory. Order preserved by insertion.
    Documents and relationships are indexed by id so they can be resolved
    without scanning every person; the indices follow the person on every write.
    """

    def __init__(self) -> None:
        self._by_id: dict[int, Person] = {}
        self._order: list[int] = []
        self._document_owner: dict[int, int] = {}  # document_id -> person_id
        self._relationship_owner: dict[int, int] = {}  # relationship_id -> person_id
        self._person_ids = itertools.count(1)
        self._document_ids = itertools.count(1)
        self._relationship_ids = itertools.count(1)

    def next_person_id(self) -> int:
        return next(self._person_ids)

    def next_document_id(self) -> int:
        return next(self._document_ids)

    def next_relationship_id(self) -> int:
        return next(self._relationship_ids)

    def _index(self, person: Person) -> None:
        for doc in person.documents:
            owner = self._document_owner.get(doc.id)
            if owner is not None and owner != person.id:
                raise RuntimeError(
                    f"Document id {doc.id} already belongs to person {owner}."
                )
        for rel in person.relationships:
            owner = self._relationship_owner.get(rel.id)
            if owner is not None and owner != person.id:
                raise RuntimeError(
                    f"Relationship id {rel.id} already belongs to person {owner}."
                )
        for doc in person.documents:
            self._document_owner[doc.id] = person.id
        for rel in person.relationships:
            self._relationship_owner[rel.id] = person.id

    def _unindex(self, person: Person) -> None:
        for doc in person.documents:
            self._document_owner.pop(doc.id, None)
        for rel in person.relationships:
            self._relationship_owner.pop(rel.id, None)

    def add(self, person: Person) -> None:
        if person.id in self._by_id:
            raise RuntimeError(f"Person id {person.id} was issued twice.")
        self._index(person)
        self._by_id[person.id] = person
        self._order.append(person.id)

    def replace(self, person: Person) -> bool:
        current = self._by_id.get(person.id)
        if current is None:
            return False
        self._unindex(current)
        try:
            self._index(person)
        except RuntimeError:
            self._index(current)
            raise
        self._by_id[person.id] = person
        return True

    def remove(self, person_id: int) -> Person | None:
        person = self._by_id.pop(person_id, None)
        if person is None:
            return None
        self._order.remove(person_id)
        self._unindex(person)
        return person

    def get_by_id(self, person_id: int) -> Person | None:
        return self._by_id.get(person_id)

    def list_all(self) -> list[Person]:
        return [self._by_id[pid] for pid in self._order]

    def document_owner(self, document_id: int) -> int | None:
        return self._document_owner.get(document_id)

    def relationship_owner(self, relationship_id: int) -> int | None:
        return self._relationship_owner.get(relationship_id)
