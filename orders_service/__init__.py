"""Orders Service - in-memory order store over HTTP, with runtime metrics."""
from orders_service.app import create_app
from orders_service.store import InvalidOrderError, Order, OrderStore

__all__ = ["create_app", "InvalidOrderError", "Order", "OrderStore"]
