"""
Payment service - saved payment methods and simulated payment processing
"""
import time
import uuid
import logging
import threading
from dataclasses import replace
from typing import Callable, List, Optional, Tuple

from models.order import PaymentMethod
from models.payment import SavedPaymentMethod

logger = logging.getLogger(__name__)

STORAGE_KEY = "payment-storage"

DEFAULT_PAYMENT_METHODS = (
    SavedPaymentMethod(
        id="pm-1",
        type=PaymentMethod.CREDIT_CARD,
        name="Visa ending in 4242",
        is_default=True,
        last4="4242",
        expiry_date="12/25"
    ),
    SavedPaymentMethod(
        id="pm-2",
        type=PaymentMethod.MOBILE_MONEY,
        name="Mobile Money"
    ),
)


class PaymentService:
    # Payment gateway used by order creation; processing is simulated

    def __init__(self, state_repository, delay: float = 2.0,
                 sleep: Callable[[float], None] = time.sleep):
        self.state_repo = state_repository
        self.delay = delay
        self.sleep = sleep
        self.lock = threading.RLock()
        self.payment_methods: Tuple[SavedPaymentMethod, ...] = DEFAULT_PAYMENT_METHODS

        stored = self.state_repo.load(STORAGE_KEY)
        if stored is not None:
            try:
                self.payment_methods = tuple(
                    SavedPaymentMethod.from_dict(method) for method in stored.get("payment_methods", [])
                )
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.exception("Stored payment methods are malformed, using defaults")

    def _save(self):
        self.state_repo.save(STORAGE_KEY, {
            "payment_methods": [method.to_dict() for method in self.payment_methods]
        })

    def list_payment_methods(self) -> List[SavedPaymentMethod]:
        return list(self.payment_methods)

    def get_payment_method(self, payment_method_id: str) -> Optional[SavedPaymentMethod]:
        for method in self.payment_methods:
            if method.id == payment_method_id:
                return method
        return None

    def add_payment_method(self, method_type: PaymentMethod, name: str,
                           last4: Optional[str] = None,
                           expiry_date: Optional[str] = None) -> SavedPaymentMethod:
        # The first saved method becomes the default
        with self.lock:
            new_method = SavedPaymentMethod(
                id=f"pm-{uuid.uuid4().hex[:12]}",
                type=method_type,
                name=name,
                is_default=not self.payment_methods,
                last4=last4,
                expiry_date=expiry_date
            )
            self.payment_methods = self.payment_methods + (new_method,)
            self._save()

        return new_method

    def remove_payment_method(self, payment_method_id: str):
        with self.lock:
            removed = self.get_payment_method(payment_method_id)
            if removed is None:
                return

            self.payment_methods = tuple(m for m in self.payment_methods if m.id != payment_method_id)
            if removed.is_default and self.payment_methods:
                self.set_default_payment_method(self.payment_methods[0].id)
            else:
                self._save()

    def set_default_payment_method(self, payment_method_id: str):
        with self.lock:
            self.payment_methods = tuple(
                replace(method, is_default=method.id == payment_method_id)
                for method in self.payment_methods
            )
            self._save()

    def get_default_payment_method(self) -> Optional[SavedPaymentMethod]:
        for method in self.payment_methods:
            if method.is_default:
                return method
        return None

    def _resolve(self, payment_method_id: str) -> Optional[SavedPaymentMethod]:
        # A saved method id, or a method type name resolved to the saved method of that type
        method = self.get_payment_method(payment_method_id)
        if method is not None:
            return method

        candidates = [m for m in self.payment_methods if m.type.value == payment_method_id]
        for candidate in candidates:
            if candidate.is_default:
                return candidate
        return candidates[0] if candidates else None

    def process_payment(self, amount: float, payment_method_id: str) -> bool:
        # Accepts saved methods and cash on delivery; blocks for the simulated delay
        if self.delay:
            self.sleep(self.delay)

        if payment_method_id == PaymentMethod.CASH.value:
            logger.info("Cash payment of %s will be collected on delivery", amount)
            return True

        if self._resolve(payment_method_id) is None:
            logger.warning("Payment of %s declined: unknown payment method %s", amount, payment_method_id)
            return False

        logger.info("Charged %s to payment method %s", amount, payment_method_id)
        return True
