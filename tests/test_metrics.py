from prometheus_client import CollectorRegistry

from awsprovider.metrics import OperationMetrics


class TestOperationMetrics:
    def test_registers_metric_families(
        self,
        registry: "CollectorRegistry",
    ) -> "None":
        OperationMetrics(registry=registry)
        # prometheus_client strips _total suffix from Counter family names
        metric_names = [m.name for m in registry.collect()]
        assert "awsprovider_operations" in metric_names
        assert "awsprovider_operation_duration_seconds" in metric_names

    def test_record_counts_by_outcome(
        self,
        registry: "CollectorRegistry",
    ) -> "None":
        metrics = OperationMetrics(registry=registry)
        metrics.record("upload_object", "success", 0.2)
        metrics.record("upload_object", "success", 0.3)
        metrics.record("upload_object", "error", 0.1)

        success = registry.get_sample_value(
            "awsprovider_operations_total",
            {"operation": "upload_object", "outcome": "success"},
        )
        errors = registry.get_sample_value(
            "awsprovider_operations_total",
            {"operation": "upload_object", "outcome": "error"},
        )
        assert success == 2.0
        assert errors == 1.0

        duration_sum = registry.get_sample_value(
            "awsprovider_operation_duration_seconds_sum",
            {"operation": "upload_object"},
        )
        assert abs(duration_sum - 0.6) < 1e-9
