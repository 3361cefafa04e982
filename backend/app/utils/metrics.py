"""Prometheus metrics for remote calls and document ingestion."""

from prometheus_client import Counter, Histogram

# Remote call metrics (extraction fetches and AI completions)
remote_call_latency_ms = Histogram(
    "remote_call_latency_ms",
    "Remote call latency in milliseconds",
    ["service", "outcome"],
    buckets=[50, 100, 250, 500, 1000, 2000, 4000, 8000, 16000, 32000],
)

remote_call_errors_total = Counter(
    "remote_call_errors_total",
    "Total remote call errors",
    ["service", "reason"],
)

documents_created_total = Counter(
    "documents_created_total",
    "Total documents created",
    ["type"],
)


class PrometheusRemoteMetrics:
    """Prometheus-based remote call metrics implementation."""

    def record_latency(self, service: str, outcome: str, latency_ms: float) -> None:
        """Record remote call latency."""
        remote_call_latency_ms.labels(service=service, outcome=outcome).observe(latency_ms)

    def inc_error(self, service: str, reason: str) -> None:
        """Increment error counter."""
        remote_call_errors_total.labels(service=service, reason=reason).inc()

    def inc_document(self, doc_type: str) -> None:
        """Increment created documents counter."""
        documents_created_total.labels(type=doc_type).inc()
