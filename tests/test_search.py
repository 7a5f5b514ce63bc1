"""Tests for person filtering, relationship candidates, and summaries."""

from datetime import datetime, timezone

from anagrafica.application import filter_persons, relationship_candidates, summarize
from anagrafica.domain import Contact, ContactType, Person
from anagrafica.infrastructure import phone_normalizer

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _person(person_id: int, first: str, last: str, *contacts: Contact, fiscal_code=None) -> Person:
    return Person(
        id=person_id,
        first_name=first,
        last_name=last,
        fiscal_code=fiscal_code,
        contacts=contacts,
        created_at=T0,
        updated_at=T0,
    )


def _people() -> list[Person]:
    return [
        _person(
            1,
            "Mario",
            "Rossi",
            Contact(ContactType.EMAIL, "mario.rossi@email.com", "Email personale", True),
            Contact(ContactType.PHONE, "+39 312 345 6789", "Telefono casa", True),
            fiscal_code="RSSMRA85C15H501Z",
        ),
        _person(
            2,
            "Giulia",
            "Bianchi",
            Contact(ContactType.EMAIL, "giulia.bianchi@studio.it", "Email lavoro", True),
            Contact(ContactType.MOBILE, "+39 333 1234567", "Cellulare", True),
        ),
        _person(3, "Luca", "Verdi"),
    ]


def test_filter_matches_name_case_insensitive() -> None:
    people = _people()
    assert [p.id for p in filter_persons(people, "rossi")] == [1]
    assert [p.id for p in filter_persons(people, "MARIO")] == [1]


def test_filter_matches_full_name_across_space() -> None:
    assert [p.id for p in filter_persons(_people(), "mario ros")] == [1]


def test_filter_matches_any_contact_value() -> None:
    people = _people()
    assert [p.id for p in filter_persons(people, "studio.it")] == [2]
    assert [p.id for p in filter_persons(people, "333 12")] == [2]
    assert [p.id for p in filter_persons(people, "+39 3")] == [1, 2]
    assert [p.id for p in filter_persons(people, "6789")] == [1]


def test_filter_ignores_contact_labels() -> None:
    assert filter_persons(_people(), "cellulare") == []


def test_blank_term_returns_input_in_order() -> None:
    people = _people()
    assert filter_persons(people, "") == people
    assert filter_persons(people, "   ") == people
    assert filter_persons(people, None) == people


def test_filter_trims_term() -> None:
    assert [p.id for p in filter_persons(_people(), "  verdi ")] == [3]


def test_relationship_candidates_exclude_self_and_match_fiscal_code() -> None:
    people = _people()
    assert [p.id for p in relationship_candidates(people, 1)] == [2, 3]
    assert [p.id for p in relationship_candidates(people, 2, "rssmra")] == [1]
    assert relationship_candidates(people, 1, "rssmra") == []


def test_summaries_pick_primary_email_and_phone() -> None:
    summaries = summarize(_people(), phone_normalizer("IT"))
    mario, giulia, luca = summaries
    assert mario.primary_email == "mario.rossi@email.com"
    assert mario.primary_phone == "+39 312 345 6789"
    assert mario.primary_phone_e164 == "+393123456789"
    assert giulia.primary_phone is None  # mobile is not a phone contact
    assert luca.primary_email is None


def test_summaries_without_normalizer_leave_e164_empty() -> None:
    assert summarize(_people())[0].primary_phone_e164 is None
