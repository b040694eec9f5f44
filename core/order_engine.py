"""
Main OrderEngine class - wires and orchestrates all services for one session
"""
import random
from datetime import datetime
from typing import Callable, Dict, List, Any, Optional, Union

from config import Settings
from database.connection import DatabaseConnection
from database.repository import MenuRepository, DeliveryPersonRepository, StateRepository
from models.cart import CartItem, CartSummary
from models.menu import Location, MenuItem, Restaurant
from models.order import Order, OrderStatus, PaymentMethod
from models.payment import SavedPaymentMethod
from services.identity import IdentityProvider
from services.scheduler import ThreadingScheduler
from services.session_state import SessionState
from services.menu_service import MenuService
from services.payment_service import PaymentService
from services.cart_service import CartService
from services.order_service import OrderService, utc_now


class OrderEngine:
    # Central cart and order manager, constructed once per client session

    def __init__(self, settings: Optional[Settings] = None,
                 identity: Optional[IdentityProvider] = None,
                 payment_gateway=None,
                 scheduler=None,
                 state_repository=None,
                 rng: Optional[random.Random] = None,
                 clock: Callable[[], datetime] = utc_now):
        self.settings = settings or Settings()

        # Repository layer
        self.db_connection = DatabaseConnection(self.settings.db_path)
        self.menu_repo = MenuRepository(self.db_connection)
        self.delivery_repo = DeliveryPersonRepository(self.db_connection)
        self.state_repo = state_repository or StateRepository(self.db_connection)

        # Collaborators; each can be swapped for a stub
        self.identity = identity or IdentityProvider()
        self.scheduler = scheduler or ThreadingScheduler()
        self.payment_service = PaymentService(self.state_repo, delay=self.settings.payment_delay)
        self.payment_gateway = payment_gateway or self.payment_service

        # Service layer
        self.state = SessionState(self.state_repo)
        self.state.load()
        self.menu_service = MenuService(self.menu_repo)
        self.cart_service = CartService(self.state, self.menu_service, self.settings)
        self.order_service = OrderService(
            self.state, self.cart_service, self.menu_service, self.identity,
            self.payment_gateway, self.delivery_repo, self.scheduler, self.settings,
            rng=rng, clock=clock
        )

    # === Catalog ===
    def list_restaurants(self, open_only: bool = False) -> List[Restaurant]:
        return self.menu_service.list_restaurants(open_only)

    def get_restaurant(self, restaurant_id: str) -> Optional[Restaurant]:
        return self.menu_service.get_restaurant(restaurant_id)

    def get_menu(self, restaurant_id: str) -> List[MenuItem]:
        return self.menu_service.get_menu(restaurant_id)

    def get_menu_item(self, menu_item_id: str) -> Optional[MenuItem]:
        return self.menu_service.get_menu_item(menu_item_id)

    def find_menu_items(self, query: str, restaurant_id: Optional[str] = None,
                        limit: int = 5) -> Dict[str, Any]:
        return self.menu_service.find_menu_items(query, restaurant_id, limit)

    # === Cart ===
    def add_to_cart(self, menu_item: MenuItem, quantity: int = 1,
                    selected_options: Optional[List] = None,
                    special_instructions: Optional[str] = None) -> CartItem:
        return self.cart_service.add_to_cart(menu_item, quantity, selected_options, special_instructions)

    def add_menu_item_to_cart(self, menu_item_id: str, quantity: int = 1,
                              selected_options: Optional[List] = None,
                              special_instructions: Optional[str] = None) -> Optional[CartItem]:
        # Catalog lookup first; None when the menu item does not exist
        menu_item = self.menu_service.get_menu_item(menu_item_id)
        if menu_item is None:
            return None
        return self.add_to_cart(menu_item, quantity, selected_options, special_instructions)

    def remove_from_cart(self, cart_item_id: str):
        self.cart_service.remove_from_cart(cart_item_id)

    def update_cart_item_quantity(self, cart_item_id: str, quantity: int) -> Optional[CartItem]:
        return self.cart_service.update_cart_item_quantity(cart_item_id, quantity)

    def clear_cart(self):
        self.cart_service.clear_cart()

    def set_selected_restaurant_id(self, restaurant_id: Optional[str]):
        self.cart_service.set_selected_restaurant_id(restaurant_id)

    @property
    def cart(self) -> List[CartItem]:
        return list(self.cart_service.get_cart())

    @property
    def selected_restaurant_id(self) -> Optional[str]:
        return self.cart_service.get_selected_restaurant_id()

    @property
    def cart_total(self) -> float:
        return self.cart_service.get_cart_total()

    @property
    def cart_item_count(self) -> int:
        return self.cart_service.get_cart_item_count()

    @property
    def delivery_fee(self) -> float:
        return self.cart_service.get_delivery_fee()

    @property
    def tax_amount(self) -> int:
        return self.cart_service.get_tax_amount()

    @property
    def order_total(self) -> float:
        return self.cart_service.get_order_total()

    def get_cart_summary(self) -> CartSummary:
        return self.cart_service.get_cart_summary()

    # === Orders ===
    def create_order(self, delivery_address: Location, payment_method: Union[PaymentMethod, str],
                     delivery_instructions: Optional[str] = None, tip: Optional[float] = None,
                     payment_method_id: Optional[str] = None) -> Order:
        return self.order_service.create_order(
            delivery_address, payment_method, delivery_instructions, tip, payment_method_id
        )

    def get_order_by_id(self, order_id: str) -> Optional[Order]:
        return self.order_service.get_order_by_id(order_id)

    def get_user_orders(self, status: Optional[Union[OrderStatus, str]] = None) -> List[Order]:
        return self.order_service.get_user_orders(status)

    def get_active_order(self) -> Optional[Order]:
        return self.order_service.get_active_order()

    def set_active_order_id(self, order_id: Optional[str]):
        self.order_service.set_active_order_id(order_id)

    def cancel_order(self, order_id: str) -> Optional[Order]:
        return self.order_service.cancel_order(order_id)

    def simulate_status_advance(self, order_id: str) -> Optional[Order]:
        return self.order_service.simulate_status_advance(order_id)

    def get_delivery_person_location(self, order_id: str) -> Optional[Location]:
        return self.order_service.get_delivery_person_location(order_id)

    def update_delivery_person_location(self, order_id: str, location: Location) -> Optional[Order]:
        return self.order_service.update_delivery_person_location(order_id, location)

    # === Payment methods ===
    def list_payment_methods(self) -> List[SavedPaymentMethod]:
        return self.payment_service.list_payment_methods()

    def add_payment_method(self, method_type: Union[PaymentMethod, str], name: str,
                           last4: Optional[str] = None,
                           expiry_date: Optional[str] = None) -> SavedPaymentMethod:
        return self.payment_service.add_payment_method(PaymentMethod(method_type), name, last4, expiry_date)

    def remove_payment_method(self, payment_method_id: str):
        self.payment_service.remove_payment_method(payment_method_id)

    def set_default_payment_method(self, payment_method_id: str):
        self.payment_service.set_default_payment_method(payment_method_id)

    def get_default_payment_method(self) -> Optional[SavedPaymentMethod]:
        return self.payment_service.get_default_payment_method()
