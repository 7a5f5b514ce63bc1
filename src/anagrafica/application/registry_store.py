"""Registry store: the single source of truth for persons and their owned rows.

Every mutation runs under one lock, replaces the stored person whole, and
publishes the full new snapshot before the lock is released, so subscribers see
snapshots in commit order. Reads copy the person list; persons are frozen, so a
caller cannot alter stored state through what it gets back.
"""

import logging
import threading
from collections import deque
from collections.abc import Callable, Sequence
from dataclasses import replace
from datetime import date, datetime, time, timezone

from anagrafica.application.dto import (
    DocumentDraft,
    InvalidReference,
    NotFound,
    PersonDraft,
    RelationshipDraft,
    ValidationFailure,
)
from anagrafica.application.notifications import (
    DeliveryMode,
    Snapshot,
    SnapshotCallback,
    SnapshotPublisher,
    Subscription,
)
from anagrafica.application.ports import PersonRepository
from anagrafica.application.validation import (
    clean_document_draft,
    clean_relationship_draft,
    validate_person_draft,
)
from anagrafica.domain import Document, Person, Relationship

logger = logging.getLogger(__name__)

PersonOutcome = Person | NotFound | ValidationFailure | InvalidReference


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_datetime(value: datetime | date | None, default: datetime) -> datetime:
    if value is None:
        return default
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def _as_date(value: datetime | date | None) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    return value


def _duplicate_ids(ids: Sequence[int | None]) -> set[int]:
    seen: set[int] = set()
    dupes: set[int] = set()
    for item_id in ids:
        if item_id is None:
            continue
        if item_id in seen:
            dupes.add(item_id)
        seen.add(item_id)
    return dupes


class RegistryStore:
    """CRUD over persons with cascading sub-entity updates and snapshot notifications."""

    def __init__(
        self,
        repository: PersonRepository,
        *,
        clock: Callable[[], datetime] | None = None,
        delivery_mode: DeliveryMode = DeliveryMode.SYNC,
        max_pending: int | None = None,
    ) -> None:
        self._repo = repository
        self._clock = clock or _utcnow
        self._lock = threading.RLock()
        self._pending: deque[Snapshot] = deque()
        self._publishing = False
        self._publisher = SnapshotPublisher(
            default_mode=delivery_mode, default_max_pending=max_pending
        )

    # --- Reads ---

    def snapshot(self) -> Snapshot:
        """Immutable point-in-time view of all persons, in insertion order."""
        with self._lock:
            return tuple(self._repo.list_all())

    def list_persons(self) -> list[Person]:
        """All persons in insertion order. The list is a fresh copy."""
        return list(self.snapshot())

    def get(self, person_id: int) -> Person | NotFound:
        with self._lock:
            person = self._repo.get_by_id(person_id)
        if person is None:
            return NotFound(kind="person", id=person_id)
        return person

    def get_document(self, document_id: int) -> Document | NotFound:
        with self._lock:
            found = self._find_document(document_id)
        if found is None:
            return NotFound(kind="document", id=document_id)
        return found[1]

    def get_relationship(self, relationship_id: int) -> Relationship | NotFound:
        with self._lock:
            found = self._find_relationship(relationship_id)
        if found is None:
            return NotFound(kind="relationship", id=relationship_id)
        return found[1]

    # --- Subscriptions ---

    def subscribe(
        self,
        callback: SnapshotCallback | None = None,
        *,
        mode: DeliveryMode | str | None = None,
        max_pending: int | None = None,
    ) -> Subscription:
        """Receive every snapshot committed from now on. Past snapshots are not replayed."""
        with self._lock:
            return self._publisher.subscribe(callback, mode=mode, max_pending=max_pending)

    def unsubscribe(self, subscription: Subscription) -> bool:
        with self._lock:
            return self._publisher.unsubscribe(subscription)

    # --- Person mutations ---

    def create(self, draft: PersonDraft) -> PersonOutcome:
        """Store a new person with a fresh id. created_at == updated_at == now."""
        cleaned = validate_person_draft(draft)
        if isinstance(cleaned, ValidationFailure):
            return cleaned
        with self._lock:
            problem = self._check_draft(None, cleaned)
            if problem is not None:
                return problem
            person_id = self._repo.next_person_id()
            now = self._clock()
            person = self._build_person(person_id, cleaned, None, now)
            self._repo.add(person)
            logger.info("Created person %s (%s)", person.id, person.full_name)
            self._publish()
            return person

    def update(self, person_id: int, draft: PersonDraft) -> PersonOutcome:
        """Replace a person's fields with the draft's. id and created_at are kept."""
        with self._lock:
            current = self._repo.get_by_id(person_id)
            if current is None:
                return NotFound(kind="person", id=person_id)
            return self._replace_locked(current, draft)

    def delete(self, person_id: int) -> bool:
        """Remove a person with its documents and relationships. False if already gone.

        Relationships held by other persons that point at the removed person are
        dropped too, since their target no longer resolves.
        """
        with self._lock:
            removed = self._repo.remove(person_id)
            if removed is None:
                return False
            now = self._clock()
            for other in self._repo.list_all():
                kept = tuple(
                    r for r in other.relationships if r.related_person_id != person_id
                )
                if len(kept) != len(other.relationships):
                    self._repo.replace(replace(other, relationships=kept, updated_at=now))
                    logger.info(
                        "Dropped %s relationship(s) of person %s pointing at deleted person %s",
                        len(other.relationships) - len(kept),
                        other.id,
                        person_id,
                    )
            logger.info(
                "Deleted person %s with %s document(s) and %s relationship(s)",
                person_id,
                len(removed.documents),
                len(removed.relationships),
            )
            self._publish()
            return True

    # --- Document mutations ---

    def add_document(
        self, person_id: int, draft: DocumentDraft
    ) -> Document | NotFound | ValidationFailure:
        with self._lock:
            current = self._repo.get_by_id(person_id)
            if current is None:
                return NotFound(kind="person", id=person_id)
            errors: list[str] = []
            cleaned = clean_document_draft(draft, errors)
            if errors:
                return ValidationFailure(errors=tuple(errors))
            base = PersonDraft.from_person(current)
            result = self._replace_locked(
                current,
                replace(base, documents=(*base.documents, replace(cleaned, id=None))),
            )
            if not isinstance(result, Person):
                return result
            return result.documents[-1]

    def update_document(
        self, document_id: int, draft: DocumentDraft
    ) -> Document | NotFound | ValidationFailure:
        with self._lock:
            found = self._find_document(document_id)
            if found is None:
                return NotFound(kind="document", id=document_id)
            owner, existing = found
            errors: list[str] = []
            cleaned = clean_document_draft(draft, errors)
            if errors:
                return ValidationFailure(errors=tuple(errors))
            cleaned = replace(
                cleaned,
                id=document_id,
                upload_date=cleaned.upload_date or existing.upload_date,
            )
            base = PersonDraft.from_person(owner)
            documents = tuple(
                cleaned if d.id == document_id else d for d in base.documents
            )
            result = self._replace_locked(owner, replace(base, documents=documents))
            if not isinstance(result, Person):
                return result
            return next(d for d in result.documents if d.id == document_id)

    def remove_document(self, document_id: int) -> Document | NotFound:
        with self._lock:
            found = self._find_document(document_id)
            if found is None:
                return NotFound(kind="document", id=document_id)
            owner, existing = found
            base = PersonDraft.from_person(owner)
            documents = tuple(d for d in base.documents if d.id != document_id)
            result = self._replace_locked(owner, replace(base, documents=documents))
            if not isinstance(result, Person):
                return result
            return existing

    # --- Relationship mutations ---

    def add_relationship(
        self, person_id: int, draft: RelationshipDraft
    ) -> Relationship | NotFound | InvalidReference | ValidationFailure:
        with self._lock:
            current = self._repo.get_by_id(person_id)
            if current is None:
                return NotFound(kind="person", id=person_id)
            errors: list[str] = []
            cleaned = clean_relationship_draft(draft, errors)
            if errors:
                return ValidationFailure(errors=tuple(errors))
            base = PersonDraft.from_person(current)
            result = self._replace_locked(
                current,
                replace(
                    base,
                    relationships=(*base.relationships, replace(cleaned, id=None)),
                ),
            )
            if not isinstance(result, Person):
                return result
            return result.relationships[-1]

    def update_relationship(
        self, relationship_id: int, draft: RelationshipDraft
    ) -> Relationship | NotFound | InvalidReference | ValidationFailure:
        with self._lock:
            found = self._find_relationship(relationship_id)
            if found is None:
                return NotFound(kind="relationship", id=relationship_id)
            owner, _ = found
            errors: list[str] = []
            cleaned = clean_relationship_draft(draft, errors)
            if errors:
                return ValidationFailure(errors=tuple(errors))
            return self._swap_relationship(owner, replace(cleaned, id=relationship_id))

    def set_relationship_active(
        self, relationship_id: int, is_active: bool
    ) -> Relationship | NotFound:
        with self._lock:
            found = self._find_relationship(relationship_id)
            if found is None:
                return NotFound(kind="relationship", id=relationship_id)
            owner, existing = found
            draft = RelationshipDraft(
                id=existing.id,
                related_person_id=existing.related_person_id,
                relationship_type=existing.relationship_type,
                description=existing.description,
                start_date=existing.start_date,
                end_date=existing.end_date,
                is_active=is_active,
            )
            return self._swap_relationship(owner, draft)

    def remove_relationship(self, relationship_id: int) -> Relationship | NotFound:
        with self._lock:
            found = self._find_relationship(relationship_id)
            if found is None:
                return NotFound(kind="relationship", id=relationship_id)
            owner, existing = found
            base = PersonDraft.from_person(owner)
            relationships = tuple(r for r in base.relationships if r.id != relationship_id)
            result = self._replace_locked(owner, replace(base, relationships=relationships))
            if not isinstance(result, Person):
                return result
            return existing

    # --- Internals (call with the lock held) ---

    def _swap_relationship(self, owner: Person, draft: RelationshipDraft):
        base = PersonDraft.from_person(owner)
        relationships = tuple(
            draft if r.id == draft.id else r for r in base.relationships
        )
        result = self._replace_locked(owner, replace(base, relationships=relationships))
        if not isinstance(result, Person):
            return result
        return next(r for r in result.relationships if r.id == draft.id)

    def _replace_locked(self, current: Person, draft: PersonDraft) -> PersonOutcome:
        cleaned = validate_person_draft(draft)
        if isinstance(cleaned, ValidationFailure):
            return cleaned
        problem = self._check_draft(current, cleaned)
        if problem is not None:
            return problem
        person = self._build_person(current.id, cleaned, current, self._clock())
        self._repo.replace(person)
        logger.info("Updated person %s (%s)", person.id, person.full_name)
        self._publish()
        return person

    def _check_draft(
        self, current: Person | None, draft: PersonDraft
    ) -> NotFound | ValidationFailure | InvalidReference | None:
        """Resolve sub-entity ids and relationship targets before anything is written."""
        doc_dupes = _duplicate_ids([d.id for d in draft.documents])
        rel_dupes = _duplicate_ids([r.id for r in draft.relationships])
        if doc_dupes or rel_dupes:
            errors = [f"Document id {i} appears more than once." for i in sorted(doc_dupes)]
            errors += [f"Relationship id {i} appears more than once." for i in sorted(rel_dupes)]
            return ValidationFailure(errors=tuple(errors))

        owned_docs = {d.id for d in current.documents} if current else set()
        owned_rels = {r.id for r in current.relationships} if current else set()
        for doc in draft.documents:
            if doc.id is not None and doc.id not in owned_docs:
                return NotFound(kind="document", id=doc.id)
        for rel in draft.relationships:
            if rel.id is not None and rel.id not in owned_rels:
                return NotFound(kind="relationship", id=rel.id)

        for rel in draft.relationships:
            if current is not None and rel.related_person_id == current.id:
                return InvalidReference(
                    reason="A person cannot be related to itself.",
                    related_person_id=rel.related_person_id,
                )
            if self._repo.get_by_id(rel.related_person_id) is None:
                return InvalidReference(
                    reason=f"Related person {rel.related_person_id} does not exist.",
                    related_person_id=rel.related_person_id,
                )
        return None

    def _build_person(
        self,
        person_id: int,
        draft: PersonDraft,
        current: Person | None,
        now: datetime,
    ) -> Person:
        existing_docs = {d.id: d for d in current.documents} if current else {}
        existing_rels = {r.id: r for r in current.relationships} if current else {}

        documents = []
        for d in draft.documents:
            previous = existing_docs.get(d.id) if d.id is not None else None
            default_upload = previous.upload_date if previous else now
            documents.append(
                Document(
                    id=d.id if d.id is not None else self._repo.next_document_id(),
                    person_id=person_id,
                    name=d.name,
                    type=d.type,
                    upload_date=_as_datetime(d.upload_date, default_upload),
                    expiry_date=_as_date(d.expiry_date),
                    file_name=d.file_name,
                    file_path=d.file_path,
                    file_size=d.file_size,
                    mime_type=d.mime_type,
                    description=d.description,
                    is_active=d.is_active,
                )
            )

        relationships = []
        for r in draft.relationships:
            previous = existing_rels.get(r.id) if r.id is not None else None
            rel = Relationship(
                id=r.id if r.id is not None else self._repo.next_relationship_id(),
                person_id=person_id,
                related_person_id=r.related_person_id,
                relationship_type=r.relationship_type,
                description=r.description,
                start_date=_as_date(r.start_date),
                end_date=_as_date(r.end_date),
                is_active=r.is_active,
                created_at=previous.created_at if previous else now,
                updated_at=now,
            )
            if previous is not None and replace(rel, updated_at=previous.updated_at) == previous:
                rel = previous
            relationships.append(rel)

        return Person(
            id=person_id,
            first_name=draft.first_name,
            last_name=draft.last_name,
            date_of_birth=_as_date(draft.date_of_birth),
            fiscal_code=draft.fiscal_code,
            gender=draft.gender,
            profession=draft.profession,
            notes=draft.notes,
            addresses=tuple(draft.addresses),
            contacts=tuple(draft.contacts),
            documents=tuple(documents),
            relationships=tuple(relationships),
            is_active=draft.is_active,
            created_at=current.created_at if current else now,
            updated_at=now,
        )

    def _find_document(self, document_id: int) -> tuple[Person, Document] | None:
        owner_id = self._repo.document_owner(document_id)
        owner = self._repo.get_by_id(owner_id) if owner_id is not None else None
        if owner is None:
            return None
        for doc in owner.documents:
            if doc.id == document_id:
                return owner, doc
        return None

    def _find_relationship(
        self, relationship_id: int
    ) -> tuple[Person, Relationship] | None:
        owner_id = self._repo.relationship_owner(relationship_id)
        owner = self._repo.get_by_id(owner_id) if owner_id is not None else None
        if owner is None:
            return None
        for rel in owner.relationships:
            if rel.id == relationship_id:
                return owner, rel
        return None

    def _publish(self) -> None:
        # A subscriber that mutates the store from its callback only queues its
        # snapshot; the outermost call delivers everything in commit order.
        self._pending.append(tuple(self._repo.list_all()))
        if self._publishing:
            return
        self._publishing = True
        try:
            while self._pending:
                self._publisher.publish(self._pending.popleft())
        finally:
            self._publishing = False
