"""Service settings powered by Pydantic BaseSettings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from servicekit.config import ServiceConfiguration
from servicekit.constants import DEFAULT_TIMEOUT_SECONDS, USER_AGENT_HEADER
from servicekit.models import CachePolicy


class ServiceSettings(BaseSettings):
    """Environment configuration for a service.

    Variables use the ``SERVICEKIT_`` prefix, e.g. ``SERVICEKIT_BASE_URL``.
    ``SERVICEKIT_DEFAULT_HEADERS`` is parsed as a JSON object.
    """

    model_config = SettingsConfigDict(
        env_prefix="SERVICEKIT_",
        case_sensitive=False,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    base_url: str | None = Field(default=None, description="Absolute base URL")
    timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS, gt=0, description="Default timeout"
    )
    cache_policy: CachePolicy = CachePolicy.USE_PROTOCOL_CACHE_POLICY
    default_headers: dict[str, str] = Field(default_factory=dict)
    user_agent: str | None = Field(default=None, min_length=1)
    service_name: str | None = None

    def to_configuration(self, base_url: str | None = None) -> ServiceConfiguration:
        """Build a service configuration from these settings.

        Args:
            base_url: Overrides the configured base URL.

        Returns:
            ServiceConfiguration instance.

        Raises:
            InvalidConfigurationError: If no valid base URL is available.
        """
        headers = dict(self.default_headers)
        has_user_agent = any(k.lower() == "user-agent" for k in headers)
        if self.user_agent and not has_user_agent:
            headers[USER_AGENT_HEADER] = self.user_agent

        return ServiceConfiguration(
            base_url=base_url or self.base_url or "",
            default_headers=headers,
            default_cache_policy=self.cache_policy,
            default_timeout=self.timeout_seconds,
            name=self.service_name,
        )


def get_settings() -> ServiceSettings:
    """Get a settings instance."""
    return ServiceSettings()
