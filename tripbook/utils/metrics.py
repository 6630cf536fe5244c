"""Prometheus metrics for storage access."""

from prometheus_client import Counter

storage_loads_total = Counter(
    "storage_loads_total",
    "Total persisted-state loads",
    ["key", "outcome"],
)

storage_writes_total = Counter(
    "storage_writes_total",
    "Total persisted-state writes",
    ["key", "outcome"],
)


class PrometheusStorageMetrics:
    """Prometheus-based storage metrics implementation."""

    def inc_load(self, key: str, outcome: str) -> None:
        """Increment load counter."""
        storage_loads_total.labels(key=key, outcome=outcome).inc()

    def inc_write(self, key: str, outcome: str) -> None:
        """Increment write counter."""
        storage_writes_total.labels(key=key, outcome=outcome).inc()
