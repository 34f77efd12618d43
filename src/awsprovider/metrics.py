from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram


class OperationMetrics:
    """
    records provider operation outcomes and latencies
    as Prometheus metrics.
     - operations_total: counts calls, labeled by operation
     and outcome (success, error, unavailable).
     - operation_duration_seconds: observes call latency,
     labeled by operation.
    """

    def __init__(self, registry: "CollectorRegistry" = REGISTRY) -> "None":
        self._operations: "Counter" = Counter(
            "awsprovider_operations_total",
            "Total provider operations by outcome",
            ["operation", "outcome"],
            registry=registry,
        )
        self._duration: "Histogram" = Histogram(
            "awsprovider_operation_duration_seconds",
            "Duration of provider operations",
            ["operation"],
            registry=registry,
        )

    def record(
        self, operation: "str", outcome: "str", duration_seconds: "float"
    ) -> "None":
        self._operations.labels(operation=operation, outcome=outcome).inc()
        self._duration.labels(operation=operation).observe(duration_seconds)
