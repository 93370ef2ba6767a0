"""Provider configuration models."""

from datetime import timedelta
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from .base import CatalogBaseModel

# Units accepted in a duration mapping such as {"hours": 1, "minutes": 30}
DURATION_UNITS = ("weeks", "days", "hours", "minutes", "seconds", "milliseconds")


def parse_duration(value: Any) -> Any:
    """Normalise a human duration mapping into a timedelta.

    Numbers and ISO 8601 strings are left for pydantic to coerce.
    """
    if isinstance(value, dict):
        unknown = set(value) - set(DURATION_UNITS)
        if unknown:
            raise ValueError(f"Unsupported duration units: {', '.join(sorted(unknown))}")
        if not value:
            raise ValueError("Duration must not be empty")
        return timedelta(**{unit: float(amount) for unit, amount in value.items()})
    return value


class ProviderSchedule(CatalogBaseModel):
    """Recurrence of the refresh task."""

    model_config = ConfigDict(frozen=True)

    frequency: timedelta
    timeout: timedelta
    initial_delay: timedelta | None = Field(default=None, alias="initialDelay")

    @field_validator("frequency", "timeout", "initial_delay", mode="before")
    @classmethod
    def validate_duration(cls, v: Any) -> Any:
        return parse_duration(v)

    @field_validator("frequency", "timeout")
    @classmethod
    def validate_positive(cls, v: timedelta) -> timedelta:
        if v <= timedelta(0):
            raise ValueError("Duration must be positive")
        return v


class ProviderDefaults(CatalogBaseModel):
    """Entity field values used when a cluster carries no annotation."""

    model_config = ConfigDict(frozen=True)

    cluster_owner: str | None = Field(default=None, alias="clusterOwner")
    system: str | None = None
    lifecycle: str | None = None
    tags: list[str] | None = None


class ProviderConfig(CatalogBaseModel):
    """Configuration of one hub-cluster-to-catalog provider."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    hub_cluster_name: str = Field(alias="hubClusterName", min_length=1)
    schedule: ProviderSchedule | None = None
    defaults: ProviderDefaults | None = None
