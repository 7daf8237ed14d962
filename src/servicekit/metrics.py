"""Metrics collection for the service layer."""

from dataclasses import dataclass, field
from typing import ClassVar

from servicekit.errors import NetworkErrorClass


@dataclass
class ServiceMetrics:
    """Metrics for request executions.

    Singleton class that tracks request counts by status, failures by
    error class, cancellations, bytes received and durations.
    """

    requests_total: dict[int, int] = field(default_factory=dict)
    failures_total: dict[str, int] = field(default_factory=dict)
    cancellations_total: int = 0
    bytes_total: int = 0
    duration_ms_total: float = 0.0
    request_count: int = 0

    _instance: ClassVar["ServiceMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "ServiceMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_response(self, status_code: int, bytes_received: int) -> None:
        """Record a completed HTTP exchange.

        Args:
            status_code: HTTP status code.
            bytes_received: Number of body bytes received.
        """
        self.requests_total[status_code] = self.requests_total.get(status_code, 0) + 1
        self.bytes_total += bytes_received

    def record_failure(self, error_class: NetworkErrorClass) -> None:
        """Record a failed execution.

        Args:
            error_class: Classification of the failure.
        """
        key = error_class.value
        self.failures_total[key] = self.failures_total.get(key, 0) + 1

    def record_cancellation(self) -> None:
        """Record a cancelled execution."""
        self.cancellations_total += 1

    def record_duration(self, duration_ms: float) -> None:
        """Record execution duration.

        Args:
            duration_ms: Duration in milliseconds.
        """
        self.duration_ms_total += duration_ms
        self.request_count += 1

    def to_dict(self) -> dict[str, int | float | dict[str, int] | dict[int, int]]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "requests_total": dict(self.requests_total),
            "failures_total": dict(self.failures_total),
            "cancellations_total": self.cancellations_total,
            "bytes_total": self.bytes_total,
            "duration_ms_total": self.duration_ms_total,
            "request_count": self.request_count,
        }

    @property
    def avg_duration_ms(self) -> float:
        """Calculate average execution duration.

        Returns:
            Average duration in milliseconds.
        """
        if self.request_count == 0:
            return 0.0
        return self.duration_ms_total / self.request_count
