"""
Payment method data models
"""
from dataclasses import dataclass
from typing import Optional, Dict, Any

from .order import PaymentMethod


@dataclass(frozen=True)
class SavedPaymentMethod:
    """Payment method stored on the user's device"""
    id: str
    type: PaymentMethod
    name: str
    is_default: bool = False
    last4: Optional[str] = None
    expiry_date: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "id": self.id,
            "type": self.type.value,
            "name": self.name,
            "is_default": self.is_default,
            "last4": self.last4,
            "expiry_date": self.expiry_date
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SavedPaymentMethod":
        return cls(
            id=data["id"],
            type=PaymentMethod(data["type"]),
            name=data["name"],
            is_default=data.get("is_default", False),
            last4=data.get("last4"),
            expiry_date=data.get("expiry_date")
        )
