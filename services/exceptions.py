"""
Errors raised by the order engine
"""


class OrderEngineError(Exception):
    """Base class for failures surfaced to the caller"""


class AuthenticationError(OrderEngineError):
    """No signed-in user to attribute the order to"""


class InvalidStateError(OrderEngineError):
    """Cart is empty or no restaurant is selected"""


class PaymentFailedError(OrderEngineError):
    """Payment gateway declined or raised; the cart is left intact"""
