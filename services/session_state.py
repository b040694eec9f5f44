"""
Process-wide cart and order state shared by the cart and order services
"""
import logging
import threading
from typing import Optional, Tuple

from models.cart import CartItem
from models.order import Order

logger = logging.getLogger(__name__)

STORAGE_KEY = "order-storage"


class SessionState:
    # Single source of truth for one client session.
    # Collections are tuples and records are frozen; writers swap in new versions.

    def __init__(self, state_repository, storage_key: str = STORAGE_KEY):
        self.state_repo = state_repository
        self.storage_key = storage_key
        self.lock = threading.RLock()

        self.cart: Tuple[CartItem, ...] = ()
        self.orders: Tuple[Order, ...] = ()
        self.selected_restaurant_id: Optional[str] = None
        self.active_order_id: Optional[str] = None

    def load(self):
        # Rehydrate cart and orders; the selected restaurant is re-derived from the cart
        try:
            stored = self.state_repo.load(self.storage_key)
        except Exception:
            logger.exception("Could not read stored order state, starting empty")
            stored = None

        if not stored:
            return

        try:
            cart = tuple(CartItem.from_dict(item) for item in stored.get("cart", []))
            orders = tuple(Order.from_dict(order) for order in stored.get("orders", []))
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.exception("Stored order state is malformed, starting empty")
            return

        with self.lock:
            self.cart = cart
            self.orders = orders
            self.selected_restaurant_id = cart[0].restaurant_id if cart else None
            self.active_order_id = None

        logger.info("Restored %d cart items and %d orders", len(cart), len(orders))

    def save(self):
        # Best effort: a failed write is logged, in-memory state stays authoritative
        with self.lock:
            snapshot = {
                "cart": [item.to_dict() for item in self.cart],
                "orders": [order.to_dict() for order in self.orders]
            }

        try:
            if not self.state_repo.save(self.storage_key, snapshot):
                logger.warning("Order state was not persisted")
        except Exception:
            logger.exception("Order state was not persisted")

    def find_order(self, order_id: str) -> Optional[Order]:
        with self.lock:
            for order in self.orders:
                if order.id == order_id:
                    return order
        return None

    def replace_order(self, updated: Order):
        with self.lock:
            self.orders = tuple(updated if order.id == updated.id else order for order in self.orders)
