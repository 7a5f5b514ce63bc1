"""Display labels and relationship categories, total over their enumerations."""

from anagrafica.domain.entities import (
    AddressType,
    ContactType,
    DocumentType,
    RelationshipCategory,
    RelationshipType,
)

DOCUMENT_TYPE_LABELS: dict[DocumentType, str] = {
    DocumentType.IDENTITY_CARD: "Carta d'Identità",
    DocumentType.PASSPORT: "Passaporto",
    DocumentType.DRIVING_LICENSE: "Patente di Guida",
    DocumentType.FISCAL_CODE: "Codice Fiscale",
    DocumentType.CONTRACT: "Contratto",
    DocumentType.CERTIFICATE: "Certificato",
    DocumentType.INVOICE: "Fattura",
    DocumentType.RECEIPT: "Ricevuta",
    DocumentType.OTHER: "Altro",
}

RELATIONSHIP_TYPE_LABELS: dict[RelationshipType, str] = {
    RelationshipType.CLIENT: "Cliente",
    RelationshipType.SUPPLIER: "Fornitore",
    RelationshipType.PARTNER: "Partner",
    RelationshipType.EMPLOYEE: "Dipendente",
    RelationshipType.EMPLOYER: "Datore di lavoro",
    RelationshipType.COLLEAGUE: "Collega",
    RelationshipType.SPOUSE: "Coniuge",
    RelationshipType.PARENT: "Genitore",
    RelationshipType.CHILD: "Figlio/a",
    RelationshipType.SIBLING: "Fratello/Sorella",
    RelationshipType.RELATIVE: "Parente",
    RelationshipType.FRIEND: "Amico/a",
    RelationshipType.CONTACT: "Contatto",
    RelationshipType.OTHER: "Altro",
}

ADDRESS_TYPE_LABELS: dict[AddressType, str] = {
    AddressType.HOME: "Casa",
    AddressType.WORK: "Lavoro",
    AddressType.OTHER: "Altro",
}

CONTACT_TYPE_LABELS: dict[ContactType, str] = {
    ContactType.PHONE: "Telefono",
    ContactType.EMAIL: "Email",
    ContactType.FAX: "Fax",
    ContactType.MOBILE: "Cellulare",
    ContactType.OTHER: "Altro",
}

RELATIONSHIP_CATEGORIES: dict[RelationshipType, RelationshipCategory] = {
    RelationshipType.CLIENT: RelationshipCategory.COMMERCIAL,
    RelationshipType.SUPPLIER: RelationshipCategory.COMMERCIAL,
    RelationshipType.PARTNER: RelationshipCategory.COMMERCIAL,
    RelationshipType.EMPLOYEE: RelationshipCategory.WORK,
    RelationshipType.EMPLOYER: RelationshipCategory.WORK,
    RelationshipType.COLLEAGUE: RelationshipCategory.WORK,
    RelationshipType.SPOUSE: RelationshipCategory.FAMILY,
    RelationshipType.PARENT: RelationshipCategory.FAMILY,
    RelationshipType.CHILD: RelationshipCategory.FAMILY,
    RelationshipType.SIBLING: RelationshipCategory.FAMILY,
    RelationshipType.RELATIVE: RelationshipCategory.FAMILY,
    RelationshipType.FRIEND: RelationshipCategory.OTHER,
    RelationshipType.CONTACT: RelationshipCategory.OTHER,
    RelationshipType.OTHER: RelationshipCategory.OTHER,
}


def document_type_label(doc_type: DocumentType) -> str:
    return DOCUMENT_TYPE_LABELS[DocumentType(doc_type)]


def relationship_type_label(rel_type: RelationshipType) -> str:
    return RELATIONSHIP_TYPE_LABELS[RelationshipType(rel_type)]


def address_type_label(address_type: AddressType) -> str:
    return ADDRESS_TYPE_LABELS[AddressType(address_type)]


def contact_type_label(contact_type: ContactType) -> str:
    return CONTACT_TYPE_LABELS[ContactType(contact_type)]


def relationship_category(rel_type: RelationshipType) -> RelationshipCategory:
    """Commercial, work, family or other, as grouped in the relationship form."""
    return RELATIONSHIP_CATEGORIES[RelationshipType(rel_type)]
