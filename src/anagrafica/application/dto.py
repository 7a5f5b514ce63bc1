"""Drafts (caller-supplied input), typed outcomes, and read-model DTOs."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime

from anagrafica.domain import (
    Address,
    Contact,
    DocumentType,
    Gender,
    Person,
    RelationshipType,
)


@dataclass(frozen=True)
class DocumentDraft:
    """Document fields supplied by the caller. id is set only when editing an existing row."""

    name: str
    type: DocumentType | str
    upload_date: datetime | date | None = None
    expiry_date: date | None = None
    file_name: str | None = None
    file_path: str | None = None
    file_size: int | None = None
    mime_type: str | None = None
    description: str | None = None
    is_active: bool = True
    id: int | None = None


@dataclass(frozen=True)
class RelationshipDraft:
    """Outbound relationship fields supplied by the caller."""

    related_person_id: int
    relationship_type: RelationshipType | str
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    is_active: bool = True
    id: int | None = None


@dataclass(frozen=True)
class PersonDraft:
    """
    Fields for creating or replacing a person (no id, created_at, updated_at).
    documents/relationships left as None mean "none" on both create and update.
    """

    first_name: str
    last_name: str
    date_of_birth: date | None = None
    fiscal_code: str | None = None
    gender: Gender | str | None = None
    profession: str | None = None
    notes: str | None = None
    addresses: Sequence[Address] = field(default_factory=tuple)
    contacts: Sequence[Contact] = field(default_factory=tuple)
    documents: Sequence[DocumentDraft] | None = None
    relationships: Sequence[RelationshipDraft] | None = None
    is_active: bool = True

    @classmethod
    def from_person(cls, person: Person) -> "PersonDraft":
        """Draft that replaces a person with itself; sub-entity ids are kept."""
        return cls(
            first_name=person.first_name,
            last_name=person.last_name,
            date_of_birth=person.date_of_birth,
            fiscal_code=person.fiscal_code,
            gender=person.gender,
            profession=person.profession,
            notes=person.notes,
            addresses=tuple(person.addresses),
            contacts=tuple(person.contacts),
            documents=tuple(
                DocumentDraft(
                    id=doc.id,
                    name=doc.name,
                    type=doc.type,
                    upload_date=doc.upload_date,
                    expiry_date=doc.expiry_date,
                    file_name=doc.file_name,
                    file_path=doc.file_path,
                    file_size=doc.file_size,
                    mime_type=doc.mime_type,
                    description=doc.description,
                    is_active=doc.is_active,
                )
                for doc in person.documents
            ),
            relationships=tuple(
                RelationshipDraft(
                    id=rel.id,
                    related_person_id=rel.related_person_id,
                    relationship_type=rel.relationship_type,
                    description=rel.description,
                    start_date=rel.start_date,
                    end_date=rel.end_date,
                    is_active=rel.is_active,
                )
                for rel in person.relationships
            ),
            is_active=person.is_active,
        )


# --- Outcomes ---


@dataclass(frozen=True)
class NotFound:
    kind: str
    id: int


@dataclass(frozen=True)
class InvalidReference:
    reason: str
    related_person_id: int


@dataclass(frozen=True)
class ValidationFailure:
    errors: tuple[str, ...]

    @property
    def reason(self) -> str:
        return "; ".join(self.errors)


# --- Read model ---


@dataclass(frozen=True)
class PersonSummary:
    """One row of the person list: names plus primary email and phone."""

    id: int
    first_name: str
    last_name: str
    primary_email: str | None = None
    primary_phone: str | None = None
    primary_phone_e164: str | None = None
