"""Prometheus metrics for search and required-tag validation."""

from prometheus_client import Counter, Histogram

# Search metrics
search_latency_ms = Histogram(
    "search_latency_ms",
    "Search pass latency in milliseconds",
    ["sort_key"],
    buckets=[1, 5, 10, 25, 50, 100, 250, 500, 1000],
)

search_results_total = Counter(
    "search_results_total",
    "Total documents returned by search passes",
)

# Validation metrics
validation_failures_total = Counter(
    "validation_failures_total",
    "Total unmet required tag groups found during validation",
    ["code"],
)


class PrometheusSearchMetrics:
    """Prometheus-based search metrics implementation."""

    def record_latency(self, sort_key: str, latency_ms: float) -> None:
        """Record search pass latency."""
        search_latency_ms.labels(sort_key=sort_key).observe(latency_ms)

    def inc_results(self, count: int) -> None:
        """Increment returned-documents counter."""
        if count > 0:
            search_results_total.inc(count)

    def inc_validation_failure(self, code: str) -> None:
        """Increment validation failure counter."""
        validation_failures_total.labels(code=code).inc()
