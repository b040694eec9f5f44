"""
Models package for the order engine
Contains data models and type definitions
"""

from .menu import Location, MenuItem, MenuItemOption, MenuItemOptionChoice, Restaurant, DeliveryPerson
from .cart import CartItem, CartSummary, SelectedOption
from .order import Order, OrderStatus, PaymentMethod, PaymentStatus, STATUS_FLOW, next_status
from .payment import SavedPaymentMethod

__all__ = [
    'Location', 'MenuItem', 'MenuItemOption', 'MenuItemOptionChoice', 'Restaurant', 'DeliveryPerson',
    'CartItem', 'CartSummary', 'SelectedOption',
    'Order', 'OrderStatus', 'PaymentMethod', 'PaymentStatus', 'STATUS_FLOW', 'next_status',
    'SavedPaymentMethod'
]
