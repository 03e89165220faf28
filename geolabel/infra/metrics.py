# geolabel/infra/metrics.py
from __future__ import annotations
import time
from collections import defaultdict, deque
from threading import Lock
from typing import Dict
from dataclasses import dataclass, field
from geolabel.infra.logging_config import get_logger

logger = get_logger(__name__)

# Samples kept per histogram; older observations are dropped
HISTOGRAM_WINDOW = 10_000


@dataclass
class Counter:
    """Simple counter metric"""
    value: int = 0

    def inc(self, amount: int = 1) -> None:
        self.value += amount


@dataclass
class Histogram:
    """Track distribution of the most recent values (e.g., lookup times)"""
    values: deque[float] = field(default_factory=lambda: deque(maxlen=HISTOGRAM_WINDOW))

    def observe(self, value: float) -> None:
        self.values.append(value)

    def get_stats(self) -> dict:
        if not self.values:
            return {"count": 0, "min": 0, "max": 0, "avg": 0, "p95": 0, "p99": 0}

        sorted_values = sorted(self.values)
        count = len(sorted_values)

        def percentile(p: float) -> float:
            idx = int(count * p)
            return sorted_values[min(idx, count - 1)]

        return {
            "count": count,
            "min": sorted_values[0],
            "max": sorted_values[-1],
            "avg": sum(sorted_values) / count,
            "p95": percentile(0.95),
            "p99": percentile(0.99),
        }


class MetricsCollector:
    """In-process metrics: labelled counters and histograms."""

    def __init__(self):
        self._counters: Dict[str, Counter] = defaultdict(Counter)
        self._histograms: Dict[str, Histogram] = defaultdict(Histogram)
        self._lock = Lock()

    def inc_counter(self, name: str, amount: int = 1, labels: dict | None = None) -> None:
        """Increment a counter metric"""
        key = self._make_key(name, labels)
        with self._lock:
            self._counters[key].inc(amount)

    def observe_histogram(self, name: str, value: float, labels: dict | None = None) -> None:
        """Add a value to histogram"""
        key = self._make_key(name, labels)
        with self._lock:
            self._histograms[key].observe(value)

    def get_metrics(self) -> dict:
        """Get all current metrics"""
        with self._lock:
            counters = {k: v.value for k, v in self._counters.items()}
            histograms = {k: v.get_stats() for k, v in self._histograms.items()}

        return {
            "counters": counters,
            "histograms": histograms,
        }

    def reset(self) -> None:
        """Reset all metrics"""
        with self._lock:
            self._counters.clear()
            self._histograms.clear()
        logger.info("Metrics reset")

    @staticmethod
    def _make_key(name: str, labels: dict | None) -> str:
        """Create a metric key from name and labels"""
        if not labels:
            return name
        label_str = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{label_str}}}"


# Global metrics collector
_metrics = MetricsCollector()


def get_metrics_collector() -> MetricsCollector:
    """Get the global metrics collector"""
    return _metrics


def inc_counter(name: str, amount: int = 1, **labels) -> None:
    """Increment a counter metric"""
    _metrics.inc_counter(name, amount, labels or None)


def observe_histogram(name: str, value: float, **labels) -> None:
    """Record a histogram value"""
    _metrics.observe_histogram(name, value, labels or None)


class Timer:
    """Context manager to time operations"""

    def __init__(self, metric_name: str, **labels):
        self.metric_name = metric_name
        self.labels = labels
        self.start_time: float | None = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time is not None:
            duration = time.perf_counter() - self.start_time
            observe_histogram(self.metric_name, duration, **self.labels)


class GeoMetrics:
    """Geocoder-level metrics tracking"""

    @staticmethod
    def lookup_resolved(source: str) -> None:
        inc_counter("geocode_lookups_total", source=source)

    @staticmethod
    def lookup_unresolved() -> None:
        inc_counter("geocode_lookups_total", source="unresolved")

    @staticmethod
    def dataset_load(outcome: str) -> None:
        inc_counter("geodata_loads_total", outcome=outcome)

    @staticmethod
    def records_skipped(dataset: str, amount: int) -> None:
        if amount:
            inc_counter("geodata_records_skipped_total", amount, dataset=dataset)

    @staticmethod
    def track_load_time() -> Timer:
        return Timer("geodata_load_seconds")

    @staticmethod
    def track_lookup_time() -> Timer:
        return Timer("geocode_lookup_seconds")
