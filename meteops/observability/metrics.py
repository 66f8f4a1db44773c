"""
Metrics definitions for MeteOps.

This module defines Prometheus metrics for monitoring
alert mutations, map/stat selectors and AI suggestions.
"""

from prometheus_client import Counter, Histogram, Gauge

# 카운터 메트릭
alerts_saved = Counter(
    "meteops_alerts_saved_total",
    "Number of alert saves",
    ["operation"]
)

alerts_deleted = Counter(
    "meteops_alerts_deleted_total",
    "Number of alert deletions that removed a record"
)

justification_requests = Counter(
    "meteops_justification_requests_total",
    "AI justification/edit suggestion requests",
    ["kind", "outcome"]
)

# 히스토그램 메트릭
severity_seconds = Histogram(
    "meteops_severity_resolve_duration_seconds",
    "Time spent resolving region severities",
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1]
)

aggregation_seconds = Histogram(
    "meteops_stats_aggregation_duration_seconds",
    "Time spent aggregating regional statistics",
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1]
)

justification_seconds = Histogram(
    "meteops_justification_duration_seconds",
    "Latency of AI suggestion calls",
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0]
)

# 게이지 메트릭
alert_store_size = Gauge(
    "meteops_alert_store_size",
    "Current number of alerts in the store"
)

uptime_seconds = Gauge(
    "meteops_uptime_seconds",
    "Service uptime in seconds"
)
