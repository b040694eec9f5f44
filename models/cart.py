"""
Cart related data models
"""
from dataclasses import dataclass
from typing import Optional, Tuple, Dict, Any

from .menu import MenuItem


@dataclass(frozen=True)
class SelectedOption:
    """Choices picked within one option group of a cart line"""
    option_id: str
    choice_ids: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"option_id": self.option_id, "choice_ids": list(self.choice_ids)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SelectedOption":
        return cls(option_id=data["option_id"], choice_ids=tuple(data.get("choice_ids", [])))


@dataclass(frozen=True)
class CartItem:
    """Cart item data model

    total_price is cached: quantity x (menu item price + selected choice prices).
    """
    id: str
    menu_item: MenuItem
    quantity: int
    total_price: float
    selected_options: Tuple[SelectedOption, ...] = ()
    special_instructions: Optional[str] = None

    @property
    def restaurant_id(self) -> str:
        return self.menu_item.restaurant_id

    @property
    def unit_price(self) -> float:
        return self.total_price / self.quantity

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "id": self.id,
            "menu_item": self.menu_item.to_dict(),
            "quantity": self.quantity,
            "selected_options": [option.to_dict() for option in self.selected_options],
            "special_instructions": self.special_instructions,
            "total_price": self.total_price
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CartItem":
        return cls(
            id=data["id"],
            menu_item=MenuItem.from_dict(data["menu_item"]),
            quantity=data["quantity"],
            total_price=data["total_price"],
            selected_options=tuple(SelectedOption.from_dict(o) for o in data.get("selected_options", [])),
            special_instructions=data.get("special_instructions")
        )


@dataclass(frozen=True)
class CartSummary:
    """Cart summary data model"""
    restaurant_id: Optional[str]
    total_items: int
    item_count: int
    subtotal: float
    delivery_fee: float
    tax: int
    total_amount: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "restaurant_id": self.restaurant_id,
            "total_items": self.total_items,
            "item_count": self.item_count,
            "subtotal": self.subtotal,
            "delivery_fee": self.delivery_fee,
            "tax": self.tax,
            "total_amount": self.total_amount
        }
