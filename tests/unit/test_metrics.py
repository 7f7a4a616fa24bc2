"""
Unit tests for Prometheus metrics.
"""

import pytest

from objectfs.common.metrics import (
    REGISTRY,
    buckets_created_total,
    get_metrics,
    get_metrics_content_type,
    record_storage_operation,
    storage_operations_total,
)
from objectfs.storage.backend import BackendError
from objectfs.storage.errors import FileNotFound
from objectfs.storage.s3 import AwsS3Adapter


def operation_count(operation, status):
    value = REGISTRY.get_sample_value(
        "storage_operations_total", {"operation": operation, "status": status}
    )
    return value or 0.0


class TestStorageMetrics:
    """Tests for storage metrics helpers."""

    def test_record_storage_operation(self):
        initial = storage_operations_total.labels(operation="size", status="success")._value.get()

        record_storage_operation("size", "success", 0.02)

        final = storage_operations_total.labels(operation="size", status="success")._value.get()
        assert final == initial + 1

    def test_get_metrics_exposes_storage_metrics(self):
        record_storage_operation("read", "success", 0.01)

        output = get_metrics()

        assert b"storage_operations_total" in output
        assert b"storage_operation_duration_seconds" in output

    def test_content_type(self):
        assert get_metrics_content_type().startswith("text/plain")


class TestAdapterInstrumentation:
    """Adapter operations are counted by outcome."""

    def test_success_is_counted(self, service):
        service.head_object.return_value = {"ContentLength": 1}
        before = operation_count("size", "success")

        AwsS3Adapter(service, "media").size("a.txt")

        assert operation_count("size", "success") == before + 1

    def test_not_found_is_counted(self, service):
        service.head_object.side_effect = BackendError(404, "NotFound")
        before = operation_count("mtime", "not_found")

        with pytest.raises(FileNotFound):
            AwsS3Adapter(service, "media").mtime("a.txt")

        assert operation_count("mtime", "not_found") == before + 1

    def test_bucket_creation_is_counted(self, service):
        service.does_bucket_exist.return_value = False
        before = buckets_created_total._value.get()

        AwsS3Adapter(service, "media", {"create": True}).write("a.txt", b"x")

        assert buckets_created_total._value.get() == before + 1
