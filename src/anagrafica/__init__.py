"""
Anagrafica core: clean-architecture layout.

- domain: entities (Person, Address, Contact, Document, Relationship). No outer dependencies.
- application: RegistryStore, derived views (expiry, reminders, search, statistics,
  relationship index), ports (PersonRepository), DTOs.
- infrastructure: adapters (InMemoryPersonRepository), phone normalization, settings, demo seed.
"""

from anagrafica.application import (
    DeliveryMode,
    DocumentDraft,
    InvalidReference,
    NotFound,
    PersonDraft,
    PersonRepository,
    RegistryStore,
    RelationshipDraft,
    Subscription,
    Tier,
    ValidationFailure,
    aggregate,
    classify,
    filter_persons,
    has_critical,
    relationships_of,
    reminders,
)
from anagrafica.domain import (
    Address,
    Contact,
    Document,
    DocumentType,
    Person,
    Relationship,
    RelationshipType,
)
from anagrafica.infrastructure import InMemoryPersonRepository, RegistrySettings

__all__ = [
    "Address",
    "Contact",
    "DeliveryMode",
    "Document",
    "DocumentDraft",
    "DocumentType",
    "InMemoryPersonRepository",
    "InvalidReference",
    "NotFound",
    "Person",
    "PersonDraft",
    "PersonRepository",
    "RegistrySettings",
    "RegistryStore",
    "Relationship",
    "RelationshipDraft",
    "RelationshipType",
    "Subscription",
    "Tier",
    "ValidationFailure",
    "aggregate",
    "classify",
    "filter_persons",
    "has_critical",
    "relationships_of",
    "reminders",
]
