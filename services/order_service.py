"""
Order service - order creation, queries and the delivery status lifecycle
"""
import uuid
import random
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, List, Optional, Union

from config import Settings
from models.menu import Location
from models.order import Order, OrderStatus, PaymentMethod, PaymentStatus, next_status
from .exceptions import AuthenticationError, InvalidStateError, PaymentFailedError
from .cart_service import CartService
from .identity import IdentityProvider
from .menu_service import MenuService
from .session_state import SessionState

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OrderService:
    # Turns the cart into orders and drives each order through its lifecycle.
    # The gateway needs process_payment(amount, method_id) -> bool, the roster
    # list_delivery_people() and the scheduler call_later(delay, callback).

    def __init__(self, state: SessionState, cart_service: CartService, menu_service: MenuService,
                 identity: IdentityProvider, payment_gateway, delivery_roster, scheduler,
                 settings: Settings, rng: Optional[random.Random] = None,
                 clock: Callable[[], datetime] = utc_now):
        self.state = state
        self.cart_service = cart_service
        self.menu_service = menu_service
        self.identity = identity
        self.payment_gateway = payment_gateway
        self.delivery_roster = delivery_roster
        self.scheduler = scheduler
        self.settings = settings
        self.rng = rng or random.Random()
        self.clock = clock
        self._placing_order = False

    def _timestamp(self) -> str:
        return self.clock().isoformat()

    # === Order creation ===
    def create_order(self, delivery_address: Location, payment_method: Union[PaymentMethod, str],
                     delivery_instructions: Optional[str] = None, tip: Optional[float] = None,
                     payment_method_id: Optional[str] = None) -> Order:
        user_id = self.identity.current_user_id()
        if not user_id:
            raise AuthenticationError("User must be logged in to create an order")

        payment_method = PaymentMethod(payment_method)

        with self.state.lock:
            if self._placing_order:
                raise InvalidStateError("An order is already being placed")

            cart = self.state.cart
            restaurant_id = self.state.selected_restaurant_id
            if not cart or not restaurant_id:
                raise InvalidStateError("Cart is empty or no restaurant selected")

            subtotal = self.cart_service.get_cart_total()
            delivery_fee = self.cart_service.get_delivery_fee()
            tax = self.cart_service.get_tax_amount()
            self._placing_order = True

        try:
            order = self._charge_and_commit(user_id, cart, restaurant_id, subtotal, delivery_fee, tax,
                                            payment_method, payment_method_id, delivery_address,
                                            delivery_instructions, tip)
        finally:
            with self.state.lock:
                self._placing_order = False

        self.state.save()
        logger.info("Order %s created for user %s: total %s", order.id, user_id, order.total)

        order_id = order.id
        self.scheduler.call_later(self.settings.status_initial_delay,
                                  lambda: self.simulate_status_advance(order_id))
        return order

    def _charge_and_commit(self, user_id, cart, restaurant_id, subtotal, delivery_fee, tax,
                           payment_method, payment_method_id, delivery_address,
                           delivery_instructions, tip) -> Order:
        total = subtotal + delivery_fee + tax + (tip or 0)

        # The lock is released while paying; no client-side timeout, a hung gateway blocks the caller
        method_id = payment_method_id or payment_method.value
        try:
            paid = self.payment_gateway.process_payment(total, method_id)
        except Exception as e:
            logger.warning("Payment gateway error for %s: %s", method_id, e)
            raise PaymentFailedError("Payment processing failed") from e

        if not paid:
            logger.warning("Payment of %s declined for %s", total, method_id)
            raise PaymentFailedError("Payment processing failed")

        now = self._timestamp()
        order = Order(
            id=f"order-{uuid.uuid4().hex}",
            user_id=user_id,
            restaurant_id=restaurant_id,
            items=cart,
            status=OrderStatus.PENDING,
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            tax=tax,
            tip=tip,
            total=total,
            payment_method=payment_method,
            payment_status=PaymentStatus.COMPLETED,
            delivery_address=delivery_address,
            delivery_instructions=delivery_instructions,
            estimated_delivery_time=self._estimate_delivery_minutes(restaurant_id),
            created_at=now,
            updated_at=now
        )

        # Only the ordered lines leave the cart; lines added while paying stay
        ordered_ids = {item.id for item in cart}
        with self.state.lock:
            remaining = tuple(item for item in self.state.cart if item.id not in ordered_ids)
            self.state.orders = (order,) + self.state.orders
            self.state.active_order_id = order.id
            self.state.cart = remaining
            self.state.selected_restaurant_id = remaining[0].restaurant_id if remaining else None

        return order

    def _estimate_delivery_minutes(self, restaurant_id: str) -> int:
        restaurant = self.menu_service.get_restaurant(restaurant_id)
        if restaurant is not None and restaurant.estimated_delivery_time:
            return restaurant.estimated_delivery_time
        return self.settings.estimated_delivery_minutes

    # === Queries ===
    def get_order_by_id(self, order_id: str) -> Optional[Order]:
        return self.state.find_order(order_id)

    def get_user_orders(self, status: Optional[Union[OrderStatus, str]] = None) -> List[Order]:
        # Newest first, since creation prepends
        user_id = self.identity.current_user_id()
        if not user_id:
            return []

        wanted = OrderStatus(status) if status else None
        return [
            order for order in self.state.orders
            if order.user_id == user_id and (wanted is None or order.status is wanted)
        ]

    def get_active_order(self) -> Optional[Order]:
        active_order_id = self.state.active_order_id
        if not active_order_id:
            return None
        return self.get_order_by_id(active_order_id)

    def set_active_order_id(self, order_id: Optional[str]):
        with self.state.lock:
            self.state.active_order_id = order_id

    def get_delivery_person_location(self, order_id: str) -> Optional[Location]:
        order = self.get_order_by_id(order_id)
        if order is None or not order.delivery_person_id:
            return None
        return order.delivery_person_location

    # === Lifecycle ===
    def next_update_delay(self) -> float:
        low = self.settings.status_min_delay
        high = self.settings.status_max_delay
        return low + self.rng.random() * (high - low)

    def simulate_status_advance(self, order_id: str) -> Optional[Order]:
        # Moves an order one step forward; missing or terminal orders are left alone
        with self.state.lock:
            order = self.state.find_order(order_id)
            if order is None or order.status.is_terminal:
                return None

            new_status = next_status(order.status)
            changes = {"status": new_status, "updated_at": self._timestamp()}

            if new_status is OrderStatus.OUT_FOR_DELIVERY and not order.delivery_person_id:
                courier = self._find_available_courier()
                if courier is not None:
                    changes["delivery_person_id"] = courier.id
                    changes["delivery_person_location"] = courier.current_location
                    logger.info("Order %s assigned to delivery person %s", order_id, courier.id)
                else:
                    logger.warning("Order %s is out for delivery without a delivery person", order_id)

            if new_status is OrderStatus.DELIVERED:
                changes["actual_delivery_time"] = order.estimated_delivery_time - self.rng.randrange(10)
                if self.state.active_order_id == order_id:
                    self.state.active_order_id = None

            updated = replace(order, **changes)
            self.state.replace_order(updated)

        self.state.save()
        logger.info("Order %s: %s -> %s", order_id, order.status.value, new_status.value)

        if new_status is not OrderStatus.DELIVERED:
            self.scheduler.call_later(self.next_update_delay(),
                                      lambda: self.simulate_status_advance(order_id))
        return updated

    def _find_available_courier(self):
        try:
            people = self.delivery_roster.list_delivery_people()
        except Exception:
            logger.exception("Delivery roster unavailable")
            return None

        for person in people:
            if person.is_available:
                return person
        return None

    def cancel_order(self, order_id: str) -> Optional[Order]:
        # Delivered and cancelled orders are returned unchanged
        with self.state.lock:
            order = self.state.find_order(order_id)
            if order is None:
                return None
            if order.status.is_terminal:
                logger.info("Order %s is already %s, not cancelling", order_id, order.status.value)
                return order

            updated = replace(order, status=OrderStatus.CANCELLED, updated_at=self._timestamp())
            self.state.replace_order(updated)
            if self.state.active_order_id == order_id:
                self.state.active_order_id = None

        self.state.save()
        logger.info("Order %s cancelled", order_id)
        return updated

    def update_delivery_person_location(self, order_id: str, location: Location) -> Optional[Order]:
        with self.state.lock:
            order = self.state.find_order(order_id)
            if order is None:
                return None

            updated = replace(order, delivery_person_location=location, updated_at=self._timestamp())
            self.state.replace_order(updated)

        self.state.save()
        return updated
