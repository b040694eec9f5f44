"""
Menu, restaurant and delivery roster data models
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple, Dict, Any


@dataclass(frozen=True)
class Location:
    """Geographic location, optionally with a street address"""
    latitude: float
    longitude: float
    address: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "address": self.address
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Location":
        return cls(
            latitude=data["latitude"],
            longitude=data["longitude"],
            address=data.get("address")
        )


@dataclass(frozen=True)
class MenuItemOptionChoice:
    """A single add-on choice with its own price delta"""
    id: str
    name: str
    price: float = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "price": self.price}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MenuItemOptionChoice":
        return cls(id=data["id"], name=data["name"], price=data.get("price", 0))


@dataclass(frozen=True)
class MenuItemOption:
    """Named option group on a menu item (e.g. size, spice level)"""
    id: str
    name: str
    choices: Tuple[MenuItemOptionChoice, ...] = ()
    required: bool = False
    multi_select: bool = False

    def find_choice(self, choice_id: str) -> Optional[MenuItemOptionChoice]:
        for choice in self.choices:
            if choice.id == choice_id:
                return choice
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "choices": [choice.to_dict() for choice in self.choices],
            "required": self.required,
            "multi_select": self.multi_select
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MenuItemOption":
        return cls(
            id=data["id"],
            name=data["name"],
            choices=tuple(MenuItemOptionChoice.from_dict(c) for c in data.get("choices", [])),
            required=data.get("required", False),
            multi_select=data.get("multi_select", False)
        )


@dataclass(frozen=True)
class MenuItem:
    """Menu item data model"""
    id: str
    restaurant_id: str
    name: str
    price: float
    description: str = ""
    category: str = ""
    is_available: bool = True
    is_popular: bool = False
    options: Tuple[MenuItemOption, ...] = ()
    match_score: Optional[float] = field(default=None, compare=False)

    def find_option(self, option_id: str) -> Optional[MenuItemOption]:
        for option in self.options:
            if option.id == option_id:
                return option
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            "id": self.id,
            "restaurant_id": self.restaurant_id,
            "name": self.name,
            "price": self.price,
            "description": self.description,
            "category": self.category,
            "is_available": self.is_available,
            "is_popular": self.is_popular,
            "options": [option.to_dict() for option in self.options]
        }
        if self.match_score is not None:
            data["match_score"] = self.match_score
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MenuItem":
        return cls(
            id=data["id"],
            restaurant_id=data["restaurant_id"],
            name=data["name"],
            price=data["price"],
            description=data.get("description", ""),
            category=data.get("category", ""),
            is_available=data.get("is_available", True),
            is_popular=data.get("is_popular", False),
            options=tuple(MenuItemOption.from_dict(o) for o in data.get("options", []))
        )


@dataclass(frozen=True)
class Restaurant:
    """Restaurant data model"""
    id: str
    name: str
    delivery_fee: float
    description: str = ""
    cuisine_type: Tuple[str, ...] = ()
    min_order_amount: float = 0
    estimated_delivery_time: Optional[int] = None
    is_open: bool = True
    rating: float = 0.0
    location: Optional[Location] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "cuisine_type": list(self.cuisine_type),
            "delivery_fee": self.delivery_fee,
            "min_order_amount": self.min_order_amount,
            "estimated_delivery_time": self.estimated_delivery_time,
            "is_open": self.is_open,
            "rating": self.rating,
            "location": self.location.to_dict() if self.location else None
        }


@dataclass(frozen=True)
class DeliveryPerson:
    """Courier record supplied by the delivery roster"""
    id: str
    name: str
    phone: str = ""
    avatar: Optional[str] = None
    current_location: Optional[Location] = None
    is_available: bool = True
    rating: float = 0.0
    completed_deliveries: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "avatar": self.avatar,
            "current_location": self.current_location.to_dict() if self.current_location else None,
            "is_available": self.is_available,
            "rating": self.rating,
            "completed_deliveries": self.completed_deliveries
        }
