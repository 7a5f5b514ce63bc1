"""Document expiry classification and the composite expiry sort order."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum

from anagrafica.domain import Document

EXPIRING_WITHIN_DAYS = 30


class Tier(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]


_TIER_RANK = {
    Tier.CRITICAL: 0,
    Tier.HIGH: 1,
    Tier.MEDIUM: 2,
    Tier.LOW: 3,
    Tier.NONE: 4,
}


@dataclass(frozen=True)
class ExpiryClassification:
    days_to_expiry: int | None
    tier: Tier

    @property
    def is_expired(self) -> bool:
        return self.days_to_expiry is not None and self.days_to_expiry < 0

    @property
    def is_expiring(self) -> bool:
        """Still valid but due within EXPIRING_WITHIN_DAYS."""
        return (
            self.days_to_expiry is not None
            and 0 < self.days_to_expiry <= EXPIRING_WITHIN_DAYS
        )


def _to_date(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


def days_to_expiry(document: Document, as_of: date) -> int | None:
    """Whole days from as_of to the expiry date; negative once expired, None without one."""
    if document.expiry_date is None:
        return None
    return (_to_date(document.expiry_date) - _to_date(as_of)).days


def tier_for_days(days: int | None) -> Tier:
    if days is None:
        return Tier.NONE
    if days < 0:
        return Tier.CRITICAL
    if days <= 7:
        return Tier.CRITICAL
    if days <= 15:
        return Tier.HIGH
    if days <= 30:
        return Tier.MEDIUM
    return Tier.LOW


def classify(document: Document, as_of: date) -> ExpiryClassification:
    days = days_to_expiry(document, as_of)
    return ExpiryClassification(days_to_expiry=days, tier=tier_for_days(days))


def _upload_timestamp(value: datetime | date) -> float:
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


def expiry_sort_key(document: Document, as_of: date) -> tuple:
    """Tier rank, then days to expiry (no expiry last), then most recent upload first."""
    result = classify(document, as_of)
    days = result.days_to_expiry
    return (
        result.tier.rank,
        days is None,
        days if days is not None else 0,
        -_upload_timestamp(document.upload_date),
    )


def sort_by_expiry(documents: Iterable[Document], as_of: date) -> list[Document]:
    return sorted(documents, key=lambda doc: expiry_sort_key(doc, as_of))


def describe_days_left(days: int) -> str:
    if days < 0:
        return f"expired {abs(days)} day{'s' if days != -1 else ''} ago"
    if days == 0:
        return "expires today"
    if days == 1:
        return "expires tomorrow"
    return f"{days} days"
