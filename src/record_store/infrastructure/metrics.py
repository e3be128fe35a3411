"""Prometheus metrics for the record store."""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Gauge,
    Info,
    REGISTRY,
    CollectorRegistry,
)


class MetricsRegistry:
    """Registry of all record store metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Record traffic
        self.records_written_total = Counter(
            "record_store_records_written_total",
            "Total number of records written",
            ["record_type"],
            registry=self._registry,
        )

        self.records_read_total = Counter(
            "record_store_records_read_total",
            "Total number of records read",
            ["record_type"],
            registry=self._registry,
        )

        self.bytes_written_total = Counter(
            "record_store_bytes_written_total",
            "Total bytes written to store files",
            registry=self._registry,
        )

        self.bytes_read_total = Counter(
            "record_store_bytes_read_total",
            "Total bytes read from store files",
            registry=self._registry,
        )

        # Failures
        self.store_errors_total = Counter(
            "record_store_errors_total",
            "Total store errors raised to callers",
            ["kind"],  # state, io, end_of_data
            registry=self._registry,
        )

        # Handles
        self.stores_open = Gauge(
            "record_store_stores_open",
            "Number of stores currently holding an open file handle",
            registry=self._registry,
        )

        self.info = Info(
            "record_store",
            "Record store information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        """The Prometheus registry the metrics are registered in."""
        return self._registry


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up the global metrics registry.

    Args:
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    from record_store import __version__
    _metrics.info.info({
        "version": __version__,
    })

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = setup_metrics()
    return _metrics
