"""Prometheus metrics for report outcomes, storage health and request latency"""

from prometheus_client import Counter, Histogram

# Report metrics
report_counter = Counter(
    "finance_report_total",
    "Monthly reports requested",
    ["outcome"],  # ok | invalid_month | storage_failure | error
)

report_latency_histogram = Histogram(
    "finance_report_latency_seconds",
    "Time to build a monthly report",
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

data_integrity_counter = Counter(
    "finance_data_integrity_errors_total",
    "Transactions with an unrecognised kind found during aggregation",
)

# Storage metrics
storage_failures_counter = Counter(
    "finance_storage_failures_total",
    "Failed or timed out storage reads",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_report(outcome: str, duration_seconds: float | None = None, integrity_errors: int = 0) -> None:
    """Record report metrics"""
    report_counter.labels(outcome=outcome).inc()
    if duration_seconds is not None:
        report_latency_histogram.observe(duration_seconds)
    if integrity_errors:
        data_integrity_counter.inc(integrity_errors)
