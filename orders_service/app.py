"""
Orders Service - HTTP surface.
Exposes /health, /metrics, the /orders create/get/list endpoints and the
read-only /runtime introspection endpoints.
"""
import logging
from dataclasses import asdict

from flask import Flask, jsonify, request
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from orders_service.config import Settings, configure_logging
from orders_service.metrics import ServiceMetrics
from orders_service.runtime_metrics import RuntimeInspector
from orders_service.store import InvalidOrderError, Order, OrderStore

logger = logging.getLogger(__name__)


def create_app(store=None, registry=None, settings=None, inspector=None):
    settings = settings or Settings()
    store = store if store is not None else OrderStore()
    inspector = inspector or RuntimeInspector()
    metrics = ServiceMetrics(store, inspector, registry=registry)

    app = Flask(__name__)

    @app.errorhandler(InvalidOrderError)
    def invalid_order(err):
        logger.warning("rejected order payload: %s", err)
        return jsonify({"error": "validation_error", "message": str(err)}), 400

    @app.route("/health")
    def health():
        """Liveness and readiness."""
        return jsonify({"status": "ok", "service": settings.service_name}), 200

    @app.route("/metrics")
    def prometheus_metrics():
        """Prometheus-compatible metrics."""
        return generate_latest(metrics.registry), 200, {"Content-Type": CONTENT_TYPE_LATEST}

    @app.route("/orders", methods=["POST"])
    def create_order():
        metrics.request_count.labels(method="POST", endpoint="/orders").inc()
        with metrics.request_latency.labels(endpoint="/orders").time():
            payload = request.get_json(silent=True)
            if payload is None:
                raise InvalidOrderError("request body must be JSON")
            order = Order.from_dict(payload)
            with metrics.order_processing.time():
                stored = store.upsert(order)
                metrics.orders_created.inc()
            return jsonify(stored.to_dict()), 200

    @app.route("/orders/<order_id>", methods=["GET"])
    def get_order(order_id):
        metrics.request_count.labels(method="GET", endpoint="/orders/<id>").inc()
        with metrics.request_latency.labels(endpoint="/orders/<id>").time():
            order = store.get(order_id)
            if order is None:
                # Absent lookups answer 200 with no body rather than 404.
                return "", 200
            return jsonify(order.to_dict()), 200

    @app.route("/orders", methods=["GET"])
    def list_orders():
        metrics.request_count.labels(method="GET", endpoint="/orders").inc()
        with metrics.request_latency.labels(endpoint="/orders").time():
            return jsonify([o.to_dict() for o in store.list_all()]), 200

    @app.route("/runtime/metrics")
    def runtime_metrics():
        return jsonify(inspector.snapshot().to_dict()), 200

    @app.route("/runtime/memory")
    def runtime_memory():
        return jsonify(asdict(inspector.memory())), 200

    @app.route("/runtime/gc")
    def runtime_gc():
        return jsonify([asdict(info) for info in inspector.garbage_collection()]), 200

    @app.route("/runtime/threads")
    def runtime_threads():
        return jsonify(asdict(inspector.threads())), 200

    return app


def main():
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    logger.info("starting %s on %s:%d", settings.service_name, settings.host, settings.port)
    create_app(settings=settings).run(host=settings.host, port=settings.port, threaded=True)


if __name__ == "__main__":
    main()
