"""Configuration model for a service."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from servicekit.constants import DEFAULT_TIMEOUT_SECONDS
from servicekit.errors import InvalidConfigurationError
from servicekit.models import CachePolicy
from servicekit.urls import parse_absolute_url


class ServiceConfiguration(BaseModel):
    """Configuration shared by every request executed against a service.

    ``base_url`` and ``default_headers`` are fixed at construction; the
    headers are exposed as a read-only mapping. The default cache policy
    and timeout may be reassigned by the owner at any time; there is no
    locking, so a request observes whichever value is current when it is
    composed.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    base_url: Annotated[
        str,
        Field(frozen=True, description="Absolute base URL, e.g. https://host/api/v2"),
    ]
    default_headers: Mapping[str, str] = Field(
        default_factory=dict,
        frozen=True,
        validate_default=True,
        description="Headers included in every request",
    )
    default_cache_policy: CachePolicy = CachePolicy.USE_PROTOCOL_CACHE_POLICY
    default_timeout: Annotated[float, Field(gt=0, description="Seconds")] = (
        DEFAULT_TIMEOUT_SECONDS
    )
    name: str | None = Field(
        default=None, frozen=True, description="Label used in log context"
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate that base_url is an absolute URL.

        Raises:
            InvalidConfigurationError: If the URL does not parse.
        """
        try:
            parse_absolute_url(v)
        except ValueError as e:
            raise InvalidConfigurationError(v, str(e)) from e
        return v

    @field_validator("default_headers")
    @classmethod
    def freeze_default_headers(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        """Copy the headers into a read-only mapping."""
        return MappingProxyType(dict(v))

    @field_serializer("default_headers")
    def serialize_default_headers(self, v: Mapping[str, str]) -> dict[str, str]:
        return dict(v)
