"""Domain entities: Person and its owned Address, Contact, Document, Relationship."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class AddressType(str, Enum):
    HOME = "home"
    WORK = "work"
    OTHER = "other"


class ContactType(str, Enum):
    PHONE = "phone"
    EMAIL = "email"
    FAX = "fax"
    MOBILE = "mobile"
    OTHER = "other"


class Gender(str, Enum):
    MALE = "M"
    FEMALE = "F"
    OTHER = "Other"


class DocumentType(str, Enum):
    IDENTITY_CARD = "identity_card"
    PASSPORT = "passport"
    DRIVING_LICENSE = "driving_license"
    FISCAL_CODE = "fiscal_code"
    CONTRACT = "contract"
    CERTIFICATE = "certificate"
    INVOICE = "invoice"
    RECEIPT = "receipt"
    OTHER = "other"


class RelationshipType(str, Enum):
    # commercial
    CLIENT = "client"
    SUPPLIER = "supplier"
    PARTNER = "partner"
    # work
    EMPLOYEE = "employee"
    EMPLOYER = "employer"
    COLLEAGUE = "colleague"
    # family
    SPOUSE = "spouse"
    PARENT = "parent"
    CHILD = "child"
    SIBLING = "sibling"
    RELATIVE = "relative"
    # other
    FRIEND = "friend"
    CONTACT = "contact"
    OTHER = "other"


class RelationshipCategory(str, Enum):
    COMMERCIAL = "commercial"
    WORK = "work"
    FAMILY = "family"
    OTHER = "other"


@dataclass(frozen=True)
class Address:
    """Postal address of a person. At most one primary address per type."""

    street: str
    city: str
    postal_code: str
    province: str
    country: str
    type: AddressType = AddressType.HOME
    is_primary: bool = False


@dataclass(frozen=True)
class Contact:
    """Phone, email or other contact channel. At most one primary contact per type."""

    type: ContactType
    value: str
    label: str | None = None
    is_primary: bool = False


@dataclass(frozen=True)
class Document:
    """
    Metadata of a document owned by a person.
    The file itself lives elsewhere; file_path only references it.
    """

    id: int
    person_id: int
    name: str
    type: DocumentType
    upload_date: datetime
    expiry_date: date | None = None
    file_name: str | None = None
    file_path: str | None = None
    file_size: int | None = None
    mime_type: str | None = None
    description: str | None = None
    is_active: bool = True

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Document name must be non-empty.")


@dataclass(frozen=True)
class Relationship:
    """
    Directed link person_id -> related_person_id, stored on the owner only.
    The inbound side is derived on read by the relationship index.
    """

    id: int
    person_id: int
    related_person_id: int
    relationship_type: RelationshipType
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    is_active: bool = True

    def __post_init__(self):
        if self.person_id == self.related_person_id:
            raise ValueError("A person cannot be related to itself.")


@dataclass(frozen=True)
class Person:
    """
    A registry record with its owned sub-entities.
    Instances are immutable; the store replaces them whole on every update.
    """

    id: int
    first_name: str
    last_name: str
    created_at: datetime
    updated_at: datetime
    date_of_birth: date | None = None
    fiscal_code: str | None = None
    gender: Gender | None = None
    profession: str | None = None
    notes: str | None = None
    addresses: tuple[Address, ...] = field(default_factory=tuple)
    contacts: tuple[Contact, ...] = field(default_factory=tuple)
    documents: tuple[Document, ...] = field(default_factory=tuple)
    relationships: tuple[Relationship, ...] = field(default_factory=tuple)
    is_active: bool = True

    def __post_init__(self):
        if not self.first_name or not self.first_name.strip():
            raise ValueError("Person first name must be non-empty.")
        if not self.last_name or not self.last_name.strip():
            raise ValueError("Person last name must be non-empty.")
        for doc in self.documents:
            if doc.person_id != self.id:
                raise ValueError(f"Document {doc.id} does not belong to person {self.id}.")
        for rel in self.relationships:
            if rel.person_id != self.id:
                raise ValueError(
                    f"Relationship {rel.id} does not belong to person {self.id}."
                )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
