"""Draft validation. Returns a cleaned draft (enums coerced, text stripped) or ValidationFailure."""

from dataclasses import replace
from datetime import date, datetime
from enum import Enum

from anagrafica.application.dto import (
    DocumentDraft,
    PersonDraft,
    RelationshipDraft,
    ValidationFailure,
)
from anagrafica.domain import (
    Address,
    AddressType,
    Contact,
    ContactType,
    DocumentType,
    Gender,
    RelationshipType,
)

_ADDRESS_REQUIRED = ("street", "city", "postal_code", "province", "country")


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return str(value).strip() or None


def _as_date(value: date | datetime | None) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    return value


def _coerce_enum(enum_cls: type[Enum], value, label: str, errors: list[str]):
    if value is None or value == "":
        errors.append(f"{label} is required.")
        return None
    try:
        return enum_cls(value)
    except ValueError:
        errors.append(f"{label} '{value}' is not a valid {enum_cls.__name__}.")
        return None


def _clean_address(index: int, address: Address, errors: list[str]) -> Address | None:
    label = f"Address {index}"
    values = {}
    ok = True
    for name in _ADDRESS_REQUIRED:
        value = _clean(getattr(address, name))
        if value is None:
            errors.append(f"{label}: {name} is required.")
            ok = False
        values[name] = value
    address_type = _coerce_enum(AddressType, address.type, f"{label}: type", errors)
    if not ok or address_type is None:
        return None
    return Address(type=address_type, is_primary=bool(address.is_primary), **values)


def _clean_contact(index: int, contact: Contact, errors: list[str]) -> Contact | None:
    label = f"Contact {index}"
    contact_type = _coerce_enum(ContactType, contact.type, f"{label}: type", errors)
    value = _clean(contact.value)
    if value is None:
        errors.append(f"{label}: value is required.")
    if contact_type is None or value is None:
        return None
    return Contact(
        type=contact_type,
        value=value,
        label=_clean(contact.label),
        is_primary=bool(contact.is_primary),
    )


def _check_single_primary(items, label: str, errors: list[str]) -> None:
    seen = set()
    for item in items:
        if not item.is_primary:
            continue
        if item.type in seen:
            errors.append(f"Only one primary {label} of type '{item.type.value}' is allowed.")
        seen.add(item.type)


def clean_document_draft(
    draft: DocumentDraft, errors: list[str], label: str = "Document"
) -> DocumentDraft | None:
    name = _clean(draft.name)
    if name is None:
        errors.append(f"{label}: name is required.")
    doc_type = _coerce_enum(DocumentType, draft.type, f"{label}: type", errors)
    if draft.file_size is not None and draft.file_size < 0:
        errors.append(f"{label}: file_size must not be negative.")
        return None
    if name is None or doc_type is None:
        return None
    return replace(draft, name=name, type=doc_type, description=_clean(draft.description))


def clean_relationship_draft(
    draft: RelationshipDraft, errors: list[str], label: str = "Relationship"
) -> RelationshipDraft | None:
    rel_type = _coerce_enum(
        RelationshipType, draft.relationship_type, f"{label}: relationship_type", errors
    )
    if draft.related_person_id is None:
        errors.append(f"{label}: related_person_id is required.")
        return None
    start, end = _as_date(draft.start_date), _as_date(draft.end_date)
    if start and end and end < start:
        errors.append(f"{label}: end_date must not precede start_date.")
        return None
    if rel_type is None:
        return None
    return replace(
        draft, relationship_type=rel_type, description=_clean(draft.description)
    )


def validate_person_draft(draft: PersonDraft) -> PersonDraft | ValidationFailure:
    """Check required fields and primary-flag invariants; return the cleaned draft."""
    errors: list[str] = []

    first_name = _clean(draft.first_name)
    if first_name is None:
        errors.append("first_name is required.")
    last_name = _clean(draft.last_name)
    if last_name is None:
        errors.append("last_name is required.")

    gender = None
    if draft.gender not in (None, ""):
        gender = _coerce_enum(Gender, draft.gender, "gender", errors)

    addresses = [
        _clean_address(i, a, errors) for i, a in enumerate(draft.addresses or (), 1)
    ]
    contacts = [
        _clean_contact(i, c, errors) for i, c in enumerate(draft.contacts or (), 1)
    ]
    documents = [
        clean_document_draft(d, errors, f"Document {i}")
        for i, d in enumerate(draft.documents or (), 1)
    ]
    relationships = [
        clean_relationship_draft(r, errors, f"Relationship {i}")
        for i, r in enumerate(draft.relationships or (), 1)
    ]

    addresses = [a for a in addresses if a is not None]
    contacts = [c for c in contacts if c is not None]
    _check_single_primary(addresses, "address", errors)
    _check_single_primary(contacts, "contact", errors)

    if errors:
        return ValidationFailure(errors=tuple(errors))

    return PersonDraft(
        first_name=first_name,
        last_name=last_name,
        date_of_birth=draft.date_of_birth,
        fiscal_code=_clean(draft.fiscal_code),
        gender=gender,
        profession=_clean(draft.profession),
        notes=_clean(draft.notes),
        addresses=tuple(addresses),
        contacts=tuple(contacts),
        documents=tuple(documents),
        relationships=tuple(relationships),
        is_active=bool(draft.is_active),
    )
