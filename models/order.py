"""
Order related data models
"""
from dataclasses import dataclass
from typing import Optional, Tuple, Dict, Any
from enum import Enum

from .cart import CartItem
from .menu import Location


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY_FOR_PICKUP = "ready_for_pickup"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


# Forward lifecycle; CANCELLED sits outside it
STATUS_FLOW: Tuple[OrderStatus, ...] = (
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY_FOR_PICKUP,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
)


def next_status(status: OrderStatus) -> Optional[OrderStatus]:
    """Return the status following ``status`` in the forward flow.

    Terminal statuses (delivered, cancelled) have no successor.
    """
    if status.is_terminal:
        return None
    return STATUS_FLOW[STATUS_FLOW.index(status) + 1]


class PaymentMethod(Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    CASH = "cash"
    MOBILE_MONEY = "mobile_money"


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class Order:
    """Order data model

    Totals are frozen at creation: total == subtotal + delivery_fee + tax + tip.
    Only status, courier fields, actual_delivery_time and updated_at change later.
    """
    id: str
    user_id: str
    restaurant_id: str
    items: Tuple[CartItem, ...]
    status: OrderStatus
    subtotal: float
    delivery_fee: float
    tax: int
    total: float
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    delivery_address: Location
    estimated_delivery_time: int
    created_at: str
    updated_at: str
    tip: Optional[float] = None
    delivery_instructions: Optional[str] = None
    actual_delivery_time: Optional[int] = None
    delivery_person_id: Optional[str] = None
    delivery_person_location: Optional[Location] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "restaurant_id": self.restaurant_id,
            "items": [item.to_dict() for item in self.items],
            "status": self.status.value,
            "subtotal": self.subtotal,
            "delivery_fee": self.delivery_fee,
            "tax": self.tax,
            "tip": self.tip,
            "total": self.total,
            "payment_method": self.payment_method.value,
            "payment_status": self.payment_status.value,
            "delivery_address": self.delivery_address.to_dict(),
            "delivery_instructions": self.delivery_instructions,
            "estimated_delivery_time": self.estimated_delivery_time,
            "actual_delivery_time": self.actual_delivery_time,
            "delivery_person_id": self.delivery_person_id,
            "delivery_person_location": (
                self.delivery_person_location.to_dict() if self.delivery_person_location else None
            ),
            "created_at": self.created_at,
            "updated_at": self.updated_at
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Order":
        courier_location = data.get("delivery_person_location")
        return cls(
            id=data["id"],
            user_id=data["user_id"],
            restaurant_id=data["restaurant_id"],
            items=tuple(CartItem.from_dict(item) for item in data.get("items", [])),
            status=OrderStatus(data["status"]),
            subtotal=data["subtotal"],
            delivery_fee=data["delivery_fee"],
            tax=data["tax"],
            tip=data.get("tip"),
            total=data["total"],
            payment_method=PaymentMethod(data["payment_method"]),
            payment_status=PaymentStatus(data["payment_status"]),
            delivery_address=Location.from_dict(data["delivery_address"]),
            delivery_instructions=data.get("delivery_instructions"),
            estimated_delivery_time=data["estimated_delivery_time"],
            actual_delivery_time=data.get("actual_delivery_time"),
            delivery_person_id=data.get("delivery_person_id"),
            delivery_person_location=Location.from_dict(courier_location) if courier_location else None,
            created_at=data["created_at"],
            updated_at=data["updated_at"]
        )
