"""
In-memory order store.
Orders are immutable values keyed by id; the store hands out the same
values it holds, so callers cannot corrupt stored state.
"""
import logging
from dataclasses import asdict, dataclass
from threading import Lock
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class InvalidOrderError(ValueError):
    """Payload could not be turned into an Order."""


@dataclass(frozen=True)
class Order:
    id: str
    description: str

    @classmethod
    def from_dict(cls, payload) -> "Order":
        """Build an Order from a decoded JSON body; both fields must be strings."""
        if not isinstance(payload, dict):
            raise InvalidOrderError("order must be a JSON object")
        for field in ("id", "description"):
            if field not in payload:
                raise InvalidOrderError(f"{field} is required")
            if not isinstance(payload[field], str):
                raise InvalidOrderError(f"{field} must be a string")
        return cls(id=payload["id"], description=payload["description"])

    def to_dict(self) -> dict:
        return asdict(self)


class OrderStore:
    """Thread-safe in-memory mapping of order id to Order."""

    def __init__(self) -> None:
        self._orders: Dict[str, Order] = {}
        self._lock = Lock()

    def upsert(self, order: Order) -> Order:
        """Insert or wholly replace the order stored under order.id."""
        with self._lock:
            replaced = order.id in self._orders
            self._orders[order.id] = order
        logger.debug("order %r %s", order.id, "replaced" if replaced else "created")
        return order

    def get(self, order_id: str) -> Optional[Order]:
        with self._lock:
            return self._orders.get(order_id)

    def list_all(self) -> List[Order]:
        """Point-in-time copy of every stored order (no ordering guarantee)."""
        with self._lock:
            return list(self._orders.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)
