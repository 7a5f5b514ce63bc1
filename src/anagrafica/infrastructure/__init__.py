"""Infrastructure layer: concrete implementations of application ports."""

from anagrafica.infrastructure.memory_repository import InMemoryPersonRepository
from anagrafica.infrastructure.phone import normalize_phone, phone_normalizer
from anagrafica.infrastructure.seed import demo_drafts, seed_store
from anagrafica.infrastructure.settings import RegistrySettings

__all__ = [
    "InMemoryPersonRepository",
    "RegistrySettings",
    "demo_drafts",
    "normalize_phone",
    "phone_normalizer",
    "seed_store",
]
