"""Demo data: three persons used to try the registry without entering data by hand."""

import logging
from datetime import date

from anagrafica.application import PersonDraft, RegistryStore
from anagrafica.domain import Address, AddressType, Contact, ContactType, Gender, Person

logger = logging.getLogger(__name__)


def demo_drafts() -> list[PersonDraft]:
    return [
        PersonDraft(
            first_name="Mario",
            last_name="Rossi",
            date_of_birth=date(1985, 3, 15),
            fiscal_code="RSSMRA85C15H501Z",
            gender=Gender.MALE,
            profession="Ingegnere",
            notes="Cliente di lunga data",
            addresses=(
                Address(
                    street="Via Roma 123",
                    city="Milano",
                    postal_code="20100",
                    province="MI",
                    country="Italia",
                    type=AddressType.HOME,
                ),
            ),
            contacts=(
                Contact(ContactType.EMAIL, "mario.rossi@email.com", "Email personale", True),
                Contact(ContactType.PHONE, "+39 02 1234567", "Telefono casa", True),
            ),
        ),
        PersonDraft(
            first_name="Giulia",
            last_name="Bianchi",
            date_of_birth=date(1990, 7, 22),
            fiscal_code="BNCGLI90L62F205X",
            gender=Gender.FEMALE,
            profession="Avvocato",
            addresses=(
                Address(
                    street="Corso Venezia 45",
                    city="Milano",
                    postal_code="20121",
                    province="MI",
                    country="Italia",
                    type=AddressType.WORK,
                ),
            ),
            contacts=(
                Contact(ContactType.EMAIL, "giulia.bianchi@studio.it", "Email lavoro", True),
                Contact(ContactType.MOBILE, "+39 333 1234567", "Cellulare", True),
            ),
        ),
        PersonDraft(
            first_name="Luca",
            last_name="Verdi",
            date_of_birth=date(1978, 11, 8),
            fiscal_code="VRDLCU78S08L219Y",
            gender=Gender.MALE,
            profession="Medico",
            addresses=(
                Address(
                    street="Via Garibaldi 78",
                    city="Roma",
                    postal_code="00100",
                    province="RM",
                    country="Italia",
                    type=AddressType.HOME,
                ),
            ),
            contacts=(
                Contact(ContactType.EMAIL, "luca.verdi@ospedale.it", "Email professionale", True),
                Contact(ContactType.PHONE, "+39 06 9876543", "Telefono studio", True),
            ),
        ),
    ]


def seed_store(store: RegistryStore) -> int:
    """Create the demo persons in store. Returns how many were created."""
    created = 0
    for draft in demo_drafts():
        result = store.create(draft)
        if not isinstance(result, Person):
            raise RuntimeError(f"Demo person {draft.first_name} {draft.last_name} rejected: {result}")
        created += 1
    logger.info("Seeded %s demo persons", created)
    return created
