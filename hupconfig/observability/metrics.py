"""Metrics collection for configuration loading."""

import threading
from dataclasses import dataclass, field
from typing import ClassVar


@dataclass
class LoadMetrics:
    """Metrics for load and reload cycles.

    Attributes:
        loads_total: Load cycles started.
        load_failures_total: Load cycles that raised.
        reloads_total: Load cycles triggered by the reload signal.
        file_skips_total: Cycles where the config file could not be read.
        last_load_duration_ms: Duration of the most recent cycle.
    """

    loads_total: int = 0
    load_failures_total: int = 0
    reloads_total: int = 0
    file_skips_total: int = 0
    last_load_duration_ms: float = 0.0

    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    _instance: ClassVar["LoadMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "LoadMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_load_started(self) -> None:
        """Record a load cycle start."""
        with self._lock:
            self.loads_total += 1

    def record_load_failure(self) -> None:
        """Record a failed load cycle."""
        with self._lock:
            self.load_failures_total += 1

    def record_reload(self) -> None:
        """Record a signal-triggered reload."""
        with self._lock:
            self.reloads_total += 1

    def record_file_skipped(self) -> None:
        """Record an unreadable config file."""
        with self._lock:
            self.file_skips_total += 1

    def record_load_duration(self, duration_ms: float) -> None:
        """Record load cycle duration.

        Args:
            duration_ms: Duration in milliseconds.
        """
        with self._lock:
            self.last_load_duration_ms = duration_ms

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        with self._lock:
            return {
                "loads_total": self.loads_total,
                "load_failures_total": self.load_failures_total,
                "reloads_total": self.reloads_total,
                "file_skips_total": self.file_skips_total,
                "last_load_duration_ms": self.last_load_duration_ms,
            }
