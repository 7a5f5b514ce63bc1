"""
FastAPI backend: REST API over the in-memory registry.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
from datetime import date, datetime
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from anagrafica.application import (
    DocumentDraft,
    InvalidReference,
    NotFound,
    PersonDraft,
    RegistryStore,
    RelationshipDraft,
    ValidationFailure,
    aggregate,
    classify,
    filter_persons,
    has_critical,
    relationship_candidates,
    relationships_of,
    reminders,
    sort_by_expiry,
    summarize,
    with_counterpart_names,
)
from anagrafica.domain import Address, Contact
from anagrafica.infrastructure import (
    InMemoryPersonRepository,
    RegistrySettings,
    phone_normalizer,
    seed_store,
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)


def _get_settings(app: FastAPI) -> RegistrySettings:
    if getattr(app.state, "settings", None) is None:
        app.state.settings = RegistrySettings()
    return app.state.settings


def get_store(app: FastAPI) -> RegistryStore:
    if getattr(app.state, "store", None) is None:
        settings = _get_settings(app)
        store = RegistryStore(
            InMemoryPersonRepository(),
            delivery_mode=settings.delivery_mode,
            max_pending=settings.max_pending_snapshots,
        )
        if settings.seed_demo:
            seed_store(store)
        app.state.store = store
    return app.state.store


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = get_store(app)
    logger.info("Registry ready with %s persons", len(store.snapshot()))
    yield


app = FastAPI(title="Anagrafica API", lifespan=lifespan)


def _raise_for(outcome) -> None:
    """Map typed outcomes to HTTP errors. Returns normally for a successful value."""
    if isinstance(outcome, NotFound):
        raise HTTPException(
            status_code=404, detail=f"{outcome.kind.capitalize()} {outcome.id} not found"
        )
    if isinstance(outcome, ValidationFailure):
        raise HTTPException(status_code=422, detail=list(outcome.errors))
    if isinstance(outcome, InvalidReference):
        raise HTTPException(status_code=400, detail=outcome.reason)


def _created(value) -> JSONResponse:
    return JSONResponse(content=jsonable_encoder(value), status_code=201)


# --- Request bodies ---


class AddressBody(BaseModel):
    street: str = ""
    city: str = ""
    postal_code: str = ""
    province: str = ""
    country: str = ""
    type: str = "home"
    is_primary: bool = False


class ContactBody(BaseModel):
    type: str = ""
    value: str = ""
    label: str | None = None
    is_primary: bool = False


class DocumentBody(BaseModel):
    name: str = ""
    type: str = "other"
    upload_date: datetime | None = None
    expiry_date: date | None = None
    file_name: str | None = None
    file_path: str | None = None
    file_size: int | None = None
    mime_type: str | None = None
    description: str | None = None
    is_active: bool = True
    id: int | None = None


class RelationshipBody(BaseModel):
    related_person_id: int
    relationship_type: str
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    is_active: bool = True
    id: int | None = None


class PersonBody(BaseModel):
    first_name: str = ""
    last_name: str = ""
    date_of_birth: date | None = None
    fiscal_code: str | None = None
    gender: str | None = None
    profession: str | None = None
    notes: str | None = None
    addresses: list[AddressBody] = []
    contacts: list[ContactBody] = []
    documents: list[DocumentBody] | None = None
    relationships: list[RelationshipBody] | None = None
    is_active: bool = True


class ActiveBody(BaseModel):
    is_active: bool


def _document_draft(body: DocumentBody) -> DocumentDraft:
    return DocumentDraft(**body.model_dump())


def _relationship_draft(body: RelationshipBody) -> RelationshipDraft:
    return RelationshipDraft(**body.model_dump())


def _person_draft(body: PersonBody) -> PersonDraft:
    return PersonDraft(
        first_name=body.first_name,
        last_name=body.last_name,
        date_of_birth=body.date_of_birth,
        fiscal_code=body.fiscal_code,
        gender=body.gender,
        profession=body.profession,
        notes=body.notes,
        addresses=tuple(Address(**a.model_dump()) for a in body.addresses),
        contacts=tuple(Contact(**c.model_dump()) for c in body.contacts),
        documents=(
            tuple(_document_draft(d) for d in body.documents)
            if body.documents is not None
            else None
        ),
        relationships=(
            tuple(_relationship_draft(r) for r in body.relationships)
            if body.relationships is not None
            else None
        ),
        is_active=body.is_active,
    )


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: persons ---


@app.get("/persons")
def list_persons(request: Request, q: str | None = None):
    return filter_persons(get_store(request.app).list_persons(), q)


@app.get("/persons/summary")
def list_person_summaries(request: Request):
    settings = _get_settings(request.app)
    return summarize(
        get_store(request.app).list_persons(),
        phone_normalizer(settings.phone_region),
    )


@app.post("/persons")
def create_person(body: PersonBody, request: Request):
    result = get_store(request.app).create(_person_draft(body))
    _raise_for(result)
    return _created(result)


@app.get("/persons/{person_id}")
def get_person(person_id: int, request: Request):
    result = get_store(request.app).get(person_id)
    _raise_for(result)
    return result


@app.put("/persons/{person_id}")
def update_person(person_id: int, body: PersonBody, request: Request):
    result = get_store(request.app).update(person_id, _person_draft(body))
    _raise_for(result)
    return result


@app.delete("/persons/{person_id}")
def delete_person(person_id: int, request: Request):
    return {"deleted": get_store(request.app).delete(person_id)}


# --- REST: relationships ---


@app.get("/persons/{person_id}/relationships")
def list_relationships(person_id: int, request: Request):
    store = get_store(request.app)
    _raise_for(store.get(person_id))
    snapshot = store.snapshot()
    views = with_counterpart_names(relationships_of(snapshot, person_id), snapshot)
    return [
        {
            "relationship": v.relationship,
            "direction": v.direction,
            "counterpart_id": v.counterpart_id,
            "counterpart_name": v.counterpart_name,
        }
        for v in views
    ]


@app.get("/persons/{person_id}/relationship-candidates")
def list_relationship_candidates(person_id: int, request: Request, q: str | None = None):
    store = get_store(request.app)
    _raise_for(store.get(person_id))
    return relationship_candidates(store.list_persons(), person_id, q)


@app.post("/persons/{person_id}/relationships")
def add_relationship(person_id: int, body: RelationshipBody, request: Request):
    result = get_store(request.app).add_relationship(person_id, _relationship_draft(body))
    _raise_for(result)
    return _created(result)


@app.put("/relationships/{relationship_id}")
def update_relationship(relationship_id: int, body: RelationshipBody, request: Request):
    result = get_store(request.app).update_relationship(
        relationship_id, _relationship_draft(body)
    )
    _raise_for(result)
    return result


@app.put("/relationships/{relationship_id}/active")
def set_relationship_active(relationship_id: int, body: ActiveBody, request: Request):
    result = get_store(request.app).set_relationship_active(relationship_id, body.is_active)
    _raise_for(result)
    return result


@app.delete("/relationships/{relationship_id}")
def remove_relationship(relationship_id: int, request: Request):
    result = get_store(request.app).remove_relationship(relationship_id)
    _raise_for(result)
    return result


# --- REST: documents ---


@app.get("/persons/{person_id}/documents")
def list_documents(person_id: int, request: Request):
    person = get_store(request.app).get(person_id)
    _raise_for(person)
    today = date.today()
    out = []
    for doc in sort_by_expiry(person.documents, today):
        result = classify(doc, today)
        out.append(
            {
                "document": doc,
                "days_to_expiry": result.days_to_expiry,
                "tier": result.tier,
                "is_expired": result.is_expired,
                "is_expiring": result.is_expiring,
            }
        )
    return out


@app.post("/persons/{person_id}/documents")
def add_document(person_id: int, body: DocumentBody, request: Request):
    result = get_store(request.app).add_document(person_id, _document_draft(body))
    _raise_for(result)
    return _created(result)


@app.put("/documents/{document_id}")
def update_document(document_id: int, body: DocumentBody, request: Request):
    result = get_store(request.app).update_document(document_id, _document_draft(body))
    _raise_for(result)
    return result


@app.delete("/documents/{document_id}")
def remove_document(document_id: int, request: Request):
    result = get_store(request.app).remove_document(document_id)
    _raise_for(result)
    return result


# --- REST: derived views ---


@app.get("/reminders")
def list_reminders(
    request: Request,
    horizon_days: int | None = None,
    include_expired: bool = False,
):
    if horizon_days is None:
        horizon_days = _get_settings(request.app).reminder_horizon_days
    if horizon_days < 0:
        raise HTTPException(status_code=400, detail="horizon_days must not be negative")
    items = reminders(
        get_store(request.app).snapshot(),
        horizon_days,
        date.today(),
        include_expired=include_expired,
    )
    if has_critical(items):
        logger.info("%s reminder(s), at least one critical", len(items))
    return {"items": items, "has_critical": has_critical(items)}


@app.get("/statistics")
def statistics(request: Request):
    return aggregate(get_store(request.app).snapshot(), date.today())
