"""Prometheus metrics for catalog loading and itinerary regeneration."""

from prometheus_client import Counter, Histogram

# Catalog fetch metrics
catalog_fetch_latency_ms = Histogram(
    "catalog_fetch_latency_ms",
    "Catalog fetch latency in milliseconds",
    ["resource", "outcome"],
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 4000, 8000],
)

catalog_fetch_errors_total = Counter(
    "catalog_fetch_errors_total",
    "Total catalog fetch errors",
    ["resource", "reason"],
)

# Session metrics
itinerary_regenerations_total = Counter(
    "itinerary_regenerations_total",
    "Total itinerary regenerations triggered by selection changes",
)


class PrometheusCatalogMetrics:
    """Prometheus-based catalog metrics implementation."""

    def record_latency(self, resource: str, outcome: str, latency_ms: float) -> None:
        """Record catalog fetch latency."""
        catalog_fetch_latency_ms.labels(resource=resource, outcome=outcome).observe(latency_ms)

    def inc_error(self, resource: str, reason: str) -> None:
        """Increment error counter."""
        catalog_fetch_errors_total.labels(resource=resource, reason=reason).inc()
