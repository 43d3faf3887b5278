"""Dashboard metrics for Prometheus monitoring."""
from prometheus_client import Counter, Gauge, Histogram

# Polling metrics
metrics_fetch_total = Counter(
    "metrics_fetch_total",
    "Total metrics fetch cycles",
    labelnames=["status"],  # status: success, failed
)

metrics_fetch_duration_seconds = Histogram(
    "metrics_fetch_duration_seconds",
    "Duration of a metrics fetch cycle in seconds",
    buckets=[0.05, 0.1, 0.2, 0.3, 0.5, 1.0, 2.5],
)

metrics_stale_results_discarded_total = Counter(
    "metrics_stale_results_discarded_total",
    "Fetch results dropped because the poller stopped or a newer result already landed",
)

polling_active_gauge = Gauge(
    "polling_active",
    "1 while the metrics poller has an armed timer",
)

# Dashboard values
dashboard_metric_value = Gauge(
    "dashboard_metric_value",
    "Latest simulated value of each overview metric",
    labelnames=["title"],
)

dashboard_metric_change_percent = Gauge(
    "dashboard_metric_change_percent",
    "Latest month-over-month change of each overview metric",
    labelnames=["title"],
)

# Export metrics
exports_generated_total = Counter(
    "exports_generated_total",
    "Total table exports generated",
    labelnames=["format"],  # csv, pdf
)
