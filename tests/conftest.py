import pytest
from prometheus_client import CollectorRegistry

from orders_service.app import create_app
from orders_service.config import Settings
from orders_service.store import Order, OrderStore


@pytest.fixture
def store():
    return OrderStore()


@pytest.fixture
def registry():
    return CollectorRegistry()


@pytest.fixture
def app(store, registry):
    app = create_app(store=store, registry=registry, settings=Settings(service_name="orders-test"))
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def order_factory():
    def make(order_id="o1", description="first"):
        return Order(id=order_id, description=description)
    return make
