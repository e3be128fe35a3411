"""Infrastructure layer - cross-cutting concerns."""

from record_store.infrastructure.config import Config, get_config
from record_store.infrastructure.logging import setup_logging, setup_logging_from_config, get_logger
from record_store.infrastructure.metrics import setup_metrics, get_metrics, MetricsRegistry

__all__ = [
    "Config",
    "get_config",
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
]
