"""
Prometheus metrics for the orders service.
Everything is registered on one explicit CollectorRegistry so several app
instances can live in one process.
"""
from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    GCCollector,
    Histogram,
    PlatformCollector,
    ProcessCollector,
)


class ServiceMetrics:
    def __init__(self, store, inspector, registry=None):
        self.registry = registry if registry is not None else CollectorRegistry()

        ProcessCollector(registry=self.registry)
        PlatformCollector(registry=self.registry)
        GCCollector(registry=self.registry)

        self.request_count = Counter(
            "http_requests_total", "Total HTTP requests", ["method", "endpoint"],
            registry=self.registry,
        )
        self.request_latency = Histogram(
            "http_request_duration_seconds", "Request latency", ["endpoint"],
            registry=self.registry,
        )

        self.orders_created = Counter(
            "orders_created_total", "Total number of orders created",
            registry=self.registry,
        )
        self.order_processing = Histogram(
            "order_processing_duration_seconds", "Time taken to process orders",
            registry=self.registry,
        )
        self.orders_active = Gauge(
            "orders_active_count", "Number of active orders in memory",
            registry=self.registry,
        )
        self.orders_active.set_function(lambda: len(store))

        self.memory_utilization = Gauge(
            "process_memory_utilization_ratio",
            "Resident memory of this process over total system memory",
            registry=self.registry,
        )
        self.memory_utilization.set_function(inspector.memory_utilization_ratio)
        self.daemon_threads = Gauge(
            "process_threads_daemon_ratio",
            "Ratio of daemon threads to total threads",
            registry=self.registry,
        )
        self.daemon_threads.set_function(inspector.daemon_thread_ratio)
