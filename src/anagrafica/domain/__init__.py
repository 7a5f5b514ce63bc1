"""Domain layer: entities and value objects. No dependencies on outer layers."""

from anagrafica.domain.entities import (
    Address,
    AddressType,
    Contact,
    ContactType,
    Document,
    DocumentType,
    Gender,
    Person,
    Relationship,
    RelationshipCategory,
    RelationshipType,
)
from anagrafica.domain.labels import (
    address_type_label,
    contact_type_label,
    document_type_label,
    relationship_category,
    relationship_type_label,
)

__all__ = [
    "Address",
    "AddressType",
    "Contact",
    "ContactType",
    "Document",
    "DocumentType",
    "Gender",
    "Person",
    "Relationship",
    "RelationshipCategory",
    "RelationshipType",
    "address_type_label",
    "contact_type_label",
    "document_type_label",
    "relationship_category",
    "relationship_type_label",
]
