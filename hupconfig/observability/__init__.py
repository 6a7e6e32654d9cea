"""Observability module for logging and metrics."""

from hupconfig.observability.logging import configure_logging, reload_context
from hupconfig.observability.metrics import LoadMetrics


__all__ = [
    "LoadMetrics",
    "configure_logging",
    "reload_context",
]
