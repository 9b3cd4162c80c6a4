"""
Prometheus metrics collection for datavalidation

Metrics live on a private registry; exposing them is left to the host
application (see generate_metrics()).
"""
from prometheus_client import (
    Counter,
    Histogram,
    CollectorRegistry,
    generate_latest,
    CONTENT_TYPE_LATEST,
)


# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# VALIDATION METRICS
# =======================

# Validation calls counter
validations_total = Counter(
    name="datavalidation_validations_total",
    documentation="Total number of validate calls",
    labelnames=["rule_set", "outcome"],  # outcome: valid, invalid, error
    registry=REGISTRY,
)

# Individual rule failures
rule_failures_total = Counter(
    name="datavalidation_rule_failures_total",
    documentation="Total number of failed rules",
    labelnames=["rule_set", "rule_type", "field_name"],
    registry=REGISTRY,
)

# =======================
# RULE SET METRICS
# =======================

# Rule set loads counter
rule_set_loads_total = Counter(
    name="datavalidation_rule_set_loads_total",
    documentation="Total number of rule set resolutions",
    labelnames=["outcome"],  # outcome: loaded, cache_hit, not_found, malformed
    registry=REGISTRY,
)

# Rule set load duration
rule_set_load_duration_seconds = Histogram(
    name="datavalidation_rule_set_load_duration_seconds",
    documentation="Time spent locating and parsing rule documents",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
    registry=REGISTRY,
)

# Cache invalidations
cache_invalidations_total = Counter(
    name="datavalidation_cache_invalidations_total",
    documentation="Total number of rule set cache entries invalidated",
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


def get_content_type() -> str:
    return CONTENT_TYPE_LATEST


class track_duration:
    """
    Context manager for tracking operation duration

    Usage:
        with track_duration(rule_set_load_duration_seconds):
            # do work
            pass
    """

    def __init__(self, histogram: Histogram, **labels):
        self.histogram = histogram
        self.labels = labels
        self.timer = None

    def __enter__(self):
        metric = self.histogram.labels(**self.labels) if self.labels else self.histogram
        self.timer = metric.time()
        self.timer.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.timer.__exit__(exc_type, exc_val, exc_tb)
        return False


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    if labels:
        counter.labels(**labels).inc(value)
    else:
        counter.inc(value)


def record_validation(rule_set: str | None, outcome: str) -> None:
    """Count one validate call under its rule set and outcome."""
    increment_counter(validations_total, rule_set=rule_set or "unknown", outcome=outcome)


def record_rule_failure(rule_set: str, rule_type: str, field_name: str) -> None:
    increment_counter(
        rule_failures_total,
        rule_set=rule_set,
        rule_type=rule_type,
        field_name=field_name,
    )
