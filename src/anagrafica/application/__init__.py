"""Application layer: the registry store, derived views, ports, and DTOs. Depends only on domain."""

from anagrafica.application.dto import (
    DocumentDraft,
    InvalidReference,
    NotFound,
    PersonDraft,
    PersonSummary,
    RelationshipDraft,
    ValidationFailure,
)
from anagrafica.application.expiry import (
    ExpiryClassification,
    Tier,
    classify,
    describe_days_left,
    expiry_sort_key,
    sort_by_expiry,
)
from anagrafica.application.notifications import (
    DeliveryMode,
    Snapshot,
    SnapshotPublisher,
    Subscription,
)
from anagrafica.application.ports import PersonRepository
from anagrafica.application.registry_store import RegistryStore
from anagrafica.application.relationship_index import (
    Direction,
    RelationshipView,
    relationships_of,
    with_counterpart_names,
)
from anagrafica.application.reminders import (
    DEFAULT_HORIZON_DAYS,
    ReminderItem,
    has_critical,
    reminders,
)
from anagrafica.application.search import (
    filter_persons,
    relationship_candidates,
    summarize,
)
from anagrafica.application.statistics import Statistics, aggregate, age_on

__all__ = [
    "DEFAULT_HORIZON_DAYS",
    "DeliveryMode",
    "Direction",
    "DocumentDraft",
    "ExpiryClassification",
    "InvalidReference",
    "NotFound",
    "PersonDraft",
    "PersonRepository",
    "PersonSummary",
    "RegistryStore",
    "RelationshipDraft",
    "RelationshipView",
    "ReminderItem",
    "Snapshot",
    "SnapshotPublisher",
    "Statistics",
    "Subscription",
    "Tier",
    "ValidationFailure",
    "age_on",
    "aggregate",
    "classify",
    "describe_days_left",
    "expiry_sort_key",
    "filter_persons",
    "has_critical",
    "relationship_candidates",
    "relationships_of",
    "reminders",
    "sort_by_expiry",
    "summarize",
    "with_counterpart_names",
]
