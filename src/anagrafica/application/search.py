"""Free-text person filter, related-person picker, and list summaries."""

from collections.abc import Callable, Iterable

from anagrafica.application.dto import PersonSummary
from anagrafica.domain import ContactType, Person


def _needle(term: str | None) -> str:
    return (term or "").strip().lower()


def matches(person: Person, needle: str) -> bool:
    """True if the lowered needle is in the full name or any contact value. Labels are ignored."""
    if needle in person.full_name.lower():
        return True
    return any(needle in (contact.value or "").lower() for contact in person.contacts)


def filter_persons(persons: Iterable[Person], term: str | None) -> list[Person]:
    """Persons matching term, case-insensitive, in input order. Blank term returns everyone."""
    persons = list(persons)
    needle = _needle(term)
    if not needle:
        return persons
    return [person for person in persons if matches(person, needle)]


def relationship_candidates(
    persons: Iterable[Person], person_id: int, term: str | None = None
) -> list[Person]:
    """Persons that person_id could be related to, matched on full name or fiscal code."""
    needle = _needle(term)
    out = []
    for person in persons:
        if person.id == person_id:
            continue
        if needle and not (
            needle in person.full_name.lower()
            or needle in (person.fiscal_code or "").lower()
        ):
            continue
        out.append(person)
    return out


def _primary_value(person: Person, contact_type: ContactType) -> str | None:
    for contact in person.contacts:
        if contact.type == contact_type and contact.is_primary:
            return contact.value
    return None


def summarize(
    persons: Iterable[Person],
    phone_normalizer: Callable[[str], str | None] | None = None,
) -> list[PersonSummary]:
    """One summary per person. phone_normalizer fills primary_phone_e164 when given."""
    out = []
    for person in persons:
        phone = _primary_value(person, ContactType.PHONE)
        out.append(
            PersonSummary(
                id=person.id,
                first_name=person.first_name,
                last_name=person.last_name,
                primary_email=_primary_value(person, ContactType.EMAIL),
                primary_phone=phone,
                primary_phone_e164=(
                    phone_normalizer(phone) if phone and phone_normalizer else None
                ),
            )
        )
    return out
