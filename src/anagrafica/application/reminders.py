"""Reminder list: documents expiring within a horizon, across every person."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from anagrafica.application.expiry import Tier, classify, expiry_sort_key
from anagrafica.domain import Document, Person

DEFAULT_HORIZON_DAYS = 60


@dataclass(frozen=True)
class ReminderItem:
    document: Document
    owner_full_name: str
    days_to_expiry: int
    tier: Tier


def reminders(
    snapshot: Iterable[Person],
    horizon_days: int = DEFAULT_HORIZON_DAYS,
    as_of: date | None = None,
    *,
    include_expired: bool = False,
) -> list[ReminderItem]:
    """Documents whose expiry date falls in [as_of, as_of + horizon_days], most urgent first.

    With include_expired, documents already past their expiry date are listed too.
    """
    if horizon_days < 0:
        raise ValueError("horizon_days must not be negative.")
    as_of = as_of or date.today()

    selected = []
    for person in snapshot:
        for doc in person.documents:
            result = classify(doc, as_of)
            days = result.days_to_expiry
            if days is None or days > horizon_days:
                continue
            if days < 0 and not include_expired:
                continue
            item = ReminderItem(
                document=doc,
                owner_full_name=person.full_name,
                days_to_expiry=result.days_to_expiry,
                tier=result.tier,
            )
            selected.append((expiry_sort_key(doc, as_of), item))

    selected.sort(key=lambda pair: pair[0])
    return [item for _, item in selected]


def has_critical(items: Iterable[ReminderItem]) -> bool:
    return any(item.tier is Tier.CRITICAL for item in items)
