"""Registry settings loaded from environment variables (REGISTRY_*)."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from anagrafica.application import DEFAULT_HORIZON_DAYS, DeliveryMode


class RegistrySettings(BaseSettings):
    """Store and API settings. Invalid values raise pydantic's ValidationError."""

    model_config = SettingsConfigDict(
        env_prefix="REGISTRY_",
        extra="ignore",
        frozen=True,
    )

    reminder_horizon_days: int = Field(default=DEFAULT_HORIZON_DAYS, ge=0)
    # Region for phone numbers written without a leading +; empty disables it
    phone_region: str | None = "IT"
    delivery_mode: DeliveryMode = DeliveryMode.SYNC
    max_pending_snapshots: int | None = Field(default=None, ge=1)
    seed_demo: bool = False

    @field_validator("phone_region", mode="before")
    @classmethod
    def _upper_region(cls, value):
        if value is None:
            return None
        return str(value).strip().upper() or None

    @field_validator("delivery_mode", mode="before")
    @classmethod
    def _lower_mode(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("max_pending_snapshots", mode="before")
    @classmethod
    def _blank_is_unbounded(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value
