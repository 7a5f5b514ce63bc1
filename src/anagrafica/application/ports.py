"""Application ports (interfaces). Implemented by infrastructure adapters."""

from typing import Protocol

from anagrafica.domain import Person


class PersonRepository(Protocol):
    """Stores person aggregates and issues ids. Callers serialize access."""

    def next_person_id(self) -> int:
        """Issue a person id greater than every id issued before. Never reused."""
        ...

    def next_document_id(self) -> int:
        """Issue a registry-wide document id."""
        ...

    def next_relationship_id(self) -> int:
        """Issue a registry-wide relationship id."""
        ...

    def add(self, person: Person) -> None:
        """Store a new person at the end of the insertion order."""
        ...

    def replace(self, person: Person) -> bool:
        """Replace the stored person with the same id. Returns False if not found."""
        ...

    def remove(self, person_id: int) -> Person | None:
        """Remove a person with its owned rows. Returns the removed person, or None."""
        ...

    def get_by_id(self, person_id: int) -> Person | None:
        """Return the person with the given id, or None."""
        ...

    def list_all(self) -> list[Person]:
        """Return all persons in insertion order."""
        ...

    def document_owner(self, document_id: int) -> int | None:
        """Return the id of the person owning the document, or None."""
        ...

    def relationship_owner(self, relationship_id: int) -> int | None:
        """Return the id of the person owning the relationship, or None."""
        ...
