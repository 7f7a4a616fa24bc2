"""
Prometheus metrics for storage operations.

Provides counters and histograms for tracking:
- Adapter operations by outcome
- Backend call latency
- Bucket provisioning
"""

from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
)

# Create a global registry
REGISTRY = CollectorRegistry()

# ========== Counters ==========

# Adapter operations
storage_operations_total = Counter(
    "storage_operations_total",
    "Total number of storage adapter operations",
    ["operation", "status"],  # read/write/..., success/not_found/failure
    registry=REGISTRY,
)

# Buckets created by adapters
buckets_created_total = Counter(
    "buckets_created_total",
    "Total number of buckets created on first use",
    registry=REGISTRY,
)

# ========== Histograms ==========

# Backend call latency
storage_operation_duration_seconds = Histogram(
    "storage_operation_duration_seconds",
    "Time spent in the object store per operation",
    ["operation"],
    buckets=(0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
    registry=REGISTRY,
)


def record_storage_operation(operation: str, status: str, duration: float) -> None:
    """
    Record the outcome and latency of one storage operation.

    Args:
        operation: Operation name (read/write/...)
        status: success, not_found or failure
        duration: Seconds spent in the backend
    """
    storage_operations_total.labels(operation=operation, status=status).inc()
    storage_operation_duration_seconds.labels(operation=operation).observe(duration)


def get_metrics() -> bytes:
    """
    Get current metrics in Prometheus format.

    Returns:
        Metrics as bytes
    """
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get content type for metrics response."""
    return CONTENT_TYPE_LATEST
