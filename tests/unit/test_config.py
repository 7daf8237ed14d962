"""Unit tests for service configuration."""

import pytest
from pydantic import ValidationError

from servicekit.config import ServiceConfiguration
from servicekit.errors import InvalidConfigurationError, NetworkErrorClass
from servicekit.models import CachePolicy


class TestServiceConfiguration:
    """Tests for ServiceConfiguration."""

    def test_defaults(self) -> None:
        """Only the base URL is required."""
        config = ServiceConfiguration(base_url="https://api.example.com/v2")

        assert config.base_url == "https://api.example.com/v2"
        assert config.default_headers == {}
        assert config.default_cache_policy == CachePolicy.USE_PROTOCOL_CACHE_POLICY
        assert config.default_timeout == 15.0
        assert config.name is None

    @pytest.mark.parametrize(
        "base_url",
        [
            "",
            "not a url",
            "/relative/path",
            "api.example.com",
            "https://",
            "https://api.example.com/with space",
        ],
    )
    def test_invalid_base_url(self, base_url: str) -> None:
        """Strings that are not absolute URLs are rejected."""
        with pytest.raises(InvalidConfigurationError) as exc_info:
            ServiceConfiguration(base_url=base_url)

        assert exc_info.value.error_class == NetworkErrorClass.INVALID_CONFIGURATION
        assert exc_info.value.base_url == base_url

    def test_base_url_is_read_only(self) -> None:
        """The base URL cannot be reassigned."""
        config = ServiceConfiguration(base_url="https://api.example.com")

        with pytest.raises(ValidationError):
            config.base_url = "https://other.example.com"  # type: ignore[misc]

    def test_default_headers_are_read_only(self) -> None:
        """Default headers cannot be reassigned."""
        config = ServiceConfiguration(
            base_url="https://api.example.com", default_headers={"A": "1"}
        )

        with pytest.raises(ValidationError):
            config.default_headers = {}  # type: ignore[misc]

    def test_default_headers_cannot_be_mutated(self) -> None:
        """Default headers cannot be changed in place either."""
        headers = {"A": "1"}
        config = ServiceConfiguration(
            base_url="https://api.example.com", default_headers=headers
        )

        with pytest.raises(TypeError):
            config.default_headers["B"] = "2"  # type: ignore[index]
        headers["C"] = "3"

        assert config.default_headers == {"A": "1"}
        assert config.model_dump()["default_headers"] == {"A": "1"}

    def test_knobs_are_mutable(self) -> None:
        """Cache policy and timeout can be adjusted; last write wins."""
        config = ServiceConfiguration(base_url="https://api.example.com")

        config.default_timeout = 30.0
        config.default_timeout = 5.0
        config.default_cache_policy = CachePolicy.RELOAD_IGNORING_LOCAL_CACHE_DATA

        assert config.default_timeout == 5.0
        assert config.default_cache_policy == (
            CachePolicy.RELOAD_IGNORING_LOCAL_CACHE_DATA
        )

    def test_timeout_must_be_positive(self) -> None:
        """Timeouts are validated on construction and assignment."""
        with pytest.raises(ValidationError):
            ServiceConfiguration(base_url="https://api.example.com", default_timeout=0)

        config = ServiceConfiguration(base_url="https://api.example.com")
        with pytest.raises(ValidationError):
            config.default_timeout = -1.0

    def test_rejects_unknown_fields(self) -> None:
        """Unknown fields are forbidden."""
        with pytest.raises(ValidationError):
            ServiceConfiguration(
                base_url="https://api.example.com",
                retries=3,  # type: ignore[call-arg]
            )
