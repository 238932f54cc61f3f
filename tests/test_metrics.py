from prometheus_client import CONTENT_TYPE_LATEST

from orders_service.store import Order


def sample(registry, name, labels=None):
    return registry.get_sample_value(name, labels or {}) or 0.0


def test_create_increments_counter_and_timer(client, registry):
    client.post("/orders", json={"id": "o1", "description": "first"})
    client.post("/orders", json={"id": "o2", "description": "second"})

    assert sample(registry, "orders_created_total") == 2.0
    assert sample(registry, "order_processing_duration_seconds_count") == 2.0


def test_rejected_create_is_not_counted(client, registry):
    client.post("/orders", json={"id": "o1"})
    assert sample(registry, "orders_created_total") == 0.0
    assert sample(registry, "http_requests_total", {"method": "POST", "endpoint": "/orders"}) == 1.0


def test_active_orders_gauge_tracks_store(client, registry, store):
    assert sample(registry, "orders_active_count") == 0.0
    store.upsert(Order("a", "1"))
    store.upsert(Order("b", "1"))
    store.upsert(Order("a", "2"))
    assert sample(registry, "orders_active_count") == 2.0


def test_request_counters_per_endpoint(client, registry):
    client.get("/orders")
    client.get("/orders/x")
    client.get("/orders/y")
    assert sample(registry, "http_requests_total", {"method": "GET", "endpoint": "/orders"}) == 1.0
    assert sample(registry, "http_requests_total", {"method": "GET", "endpoint": "/orders/<id>"}) == 2.0
    assert sample(registry, "http_request_duration_seconds_count", {"endpoint": "/orders/<id>"}) == 2.0


def test_runtime_ratio_gauges(app, registry):
    memory = registry.get_sample_value("process_memory_utilization_ratio")
    daemon = registry.get_sample_value("process_threads_daemon_ratio")
    assert 0.0 < memory <= 1.0
    assert 0.0 <= daemon <= 1.0


def test_metrics_endpoint_exposition(client):
    client.post("/orders", json={"id": "o1", "description": "first"})
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert resp.headers["Content-Type"] == CONTENT_TYPE_LATEST
    text = resp.get_data(as_text=True)
    assert "orders_created_total 1.0" in text
    assert "orders_active_count 1.0" in text
    assert "python_info" in text


def test_two_apps_keep_separate_registries(registry):
    from prometheus_client import CollectorRegistry

    from orders_service.app import create_app

    first = create_app(registry=registry).test_client()
    other_registry = CollectorRegistry()
    second = create_app(registry=other_registry).test_client()

    first.post("/orders", json={"id": "o1", "description": "x"})
    assert sample(registry, "orders_created_total") == 1.0
    assert sample(other_registry, "orders_created_total") == 0.0
    assert second.get("/orders").get_json() == []
