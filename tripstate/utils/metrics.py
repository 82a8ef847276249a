"""Prometheus metrics for the preference store and session documents."""

from prometheus_client import Counter, Histogram

# Preference store metrics
preference_writes_total = Counter(
    "preference_writes_total",
    "Total durable preference writes",
    ["operation", "outcome"],
)

preference_write_latency_ms = Histogram(
    "preference_write_latency_ms",
    "Durable preference write latency in milliseconds",
    ["operation"],
    buckets=[1, 5, 10, 50, 100, 250, 500, 1000, 2500],
)

preference_load_fallbacks_total = Counter(
    "preference_load_fallbacks_total",
    "Total preference loads that fell back to defaults",
    ["reason"],
)

# Session document metrics
itinerary_mutations_total = Counter(
    "itinerary_mutations_total",
    "Total itinerary CRUD calls",
    ["operation", "outcome"],
)


class PrometheusStoreMetrics:
    """Prometheus-based preference store metrics implementation."""

    def record_write(self, operation: str, outcome: str, latency_ms: float) -> None:
        """Record a durable write attempt."""
        preference_writes_total.labels(operation=operation, outcome=outcome).inc()
        preference_write_latency_ms.labels(operation=operation).observe(latency_ms)

    def inc_load_fallback(self, reason: str) -> None:
        """Increment load fallback counter."""
        preference_load_fallbacks_total.labels(reason=reason).inc()


class PrometheusItineraryMetrics:
    """Prometheus-based itinerary metrics implementation."""

    def inc_mutation(self, operation: str, outcome: str) -> None:
        """Increment itinerary mutation counter."""
        itinerary_mutations_total.labels(operation=operation, outcome=outcome).inc()
