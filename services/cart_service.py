"""
Cart service - handles cart operations and price aggregation
"""
import uuid
import logging
from dataclasses import replace
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Any, Optional, Iterable, Tuple, Union

from config import Settings
from models.cart import CartItem, CartSummary, SelectedOption
from models.menu import MenuItem
from .menu_service import MenuService
from .session_state import SessionState

logger = logging.getLogger(__name__)

OptionSelection = Union[SelectedOption, Dict[str, Any]]


def round_half_up(amount: float) -> int:
    return int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_line_total(menu_item: MenuItem, quantity: int,
                         selected_options: Iterable[SelectedOption]) -> float:
    # quantity x (base price + chosen choices); unknown options or choices add nothing.
    # A single-select group is charged for its first known choice only.
    unit_price = menu_item.price

    for selection in selected_options:
        option = menu_item.find_option(selection.option_id)
        if option is None:
            continue
        for choice_id in selection.choice_ids:
            choice = option.find_choice(choice_id)
            if choice is None:
                continue
            unit_price += choice.price
            if not option.multi_select:
                break

    return unit_price * quantity


def normalize_selected_options(selected_options: Optional[Iterable[OptionSelection]]) -> Tuple[SelectedOption, ...]:
    if not selected_options:
        return ()

    normalized = []
    for selection in selected_options:
        if isinstance(selection, SelectedOption):
            normalized.append(selection)
        else:
            normalized.append(SelectedOption(
                option_id=selection["option_id"],
                choice_ids=tuple(selection.get("choice_ids", []))
            ))
    return tuple(normalized)


class CartService:
    # Cart scoped to a single restaurant, plus the derived price getters

    def __init__(self, state: SessionState, menu_service: MenuService, settings: Settings):
        self.state = state
        self.menu_service = menu_service
        self.settings = settings

    def add_to_cart(self, menu_item: MenuItem, quantity: int = 1,
                    selected_options: Optional[List[OptionSelection]] = None,
                    special_instructions: Optional[str] = None) -> CartItem:
        # Adding from another restaurant starts a new cart
        if quantity < 1:
            raise ValueError("quantity must be at least 1")

        options = normalize_selected_options(selected_options)
        cart_item = CartItem(
            id=uuid.uuid4().hex,
            menu_item=menu_item,
            quantity=quantity,
            total_price=calculate_line_total(menu_item, quantity, options),
            selected_options=options,
            special_instructions=special_instructions
        )

        with self.state.lock:
            cart = self.state.cart
            if cart and self.state.selected_restaurant_id != menu_item.restaurant_id:
                logger.info("Switching cart from restaurant %s to %s, discarding %d items",
                            self.state.selected_restaurant_id, menu_item.restaurant_id, len(cart))
                cart = ()

            self.state.cart = cart + (cart_item,)
            self.state.selected_restaurant_id = menu_item.restaurant_id

        self.state.save()
        return cart_item

    def remove_from_cart(self, cart_item_id: str):
        with self.state.lock:
            remaining = tuple(item for item in self.state.cart if item.id != cart_item_id)
            if len(remaining) == len(self.state.cart):
                return

            self.state.cart = remaining
            if not remaining:
                self.state.selected_restaurant_id = None

        self.state.save()

    def update_cart_item_quantity(self, cart_item_id: str, quantity: int) -> Optional[CartItem]:
        # Keeps the per-unit price of the line, option deltas included
        if quantity <= 0:
            self.remove_from_cart(cart_item_id)
            return None

        updated = None
        with self.state.lock:
            cart = []
            for item in self.state.cart:
                if item.id == cart_item_id:
                    updated = replace(item, quantity=quantity, total_price=item.unit_price * quantity)
                    cart.append(updated)
                else:
                    cart.append(item)
            self.state.cart = tuple(cart)

        if updated is not None:
            self.state.save()
        return updated

    def clear_cart(self):
        with self.state.lock:
            self.state.cart = ()
            self.state.selected_restaurant_id = None

        self.state.save()

    def set_selected_restaurant_id(self, restaurant_id: Optional[str]):
        with self.state.lock:
            self.state.selected_restaurant_id = restaurant_id

    def get_cart(self) -> Tuple[CartItem, ...]:
        return self.state.cart

    def get_selected_restaurant_id(self) -> Optional[str]:
        return self.state.selected_restaurant_id

    # === Derived getters ===
    def get_cart_total(self) -> float:
        return sum(item.total_price for item in self.state.cart)

    def get_cart_item_count(self) -> int:
        return sum(item.quantity for item in self.state.cart)

    def get_delivery_fee(self) -> float:
        # Restaurant's own fee when the catalog knows it, flat default otherwise
        restaurant_id = self.state.selected_restaurant_id
        if not restaurant_id:
            return 0

        restaurant = self.menu_service.get_restaurant(restaurant_id)
        if restaurant is None:
            return self.settings.default_delivery_fee
        return restaurant.delivery_fee

    def get_tax_amount(self) -> int:
        return round_half_up(self.get_cart_total() * self.settings.tax_rate)

    def get_order_total(self) -> float:
        return self.get_cart_total() + self.get_delivery_fee() + self.get_tax_amount()

    def get_cart_summary(self) -> CartSummary:
        with self.state.lock:
            subtotal = self.get_cart_total()
            delivery_fee = self.get_delivery_fee()
            tax = self.get_tax_amount()

            return CartSummary(
                restaurant_id=self.state.selected_restaurant_id,
                total_items=len(self.state.cart),
                item_count=self.get_cart_item_count(),
                subtotal=subtotal,
                delivery_fee=delivery_fee,
                tax=tax,
                total_amount=subtotal + delivery_fee + tax
            )
