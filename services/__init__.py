"""
Services package for the order engine
Contains business logic services
"""

from .exceptions import OrderEngineError, AuthenticationError, InvalidStateError, PaymentFailedError
from .scheduler import ThreadingScheduler
from .session_state import SessionState
from .identity import IdentityProvider
from .menu_service import MenuService
from .payment_service import PaymentService
from .cart_service import CartService
from .order_service import OrderService

__all__ = [
    'OrderEngineError', 'AuthenticationError', 'InvalidStateError', 'PaymentFailedError',
    'ThreadingScheduler', 'SessionState', 'IdentityProvider',
    'MenuService', 'PaymentService', 'CartService', 'OrderService'
]
