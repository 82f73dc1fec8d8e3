"""Market domain models."""
from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class OrderStatus(str, Enum):
    """Order status enum."""
    PENDING = "pending"
    APPROVED = "approved"
    ON_THE_WAY = "on the way"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


ORDER_STATUS_EMOJI = {
    OrderStatus.PENDING: "⏳",
    OrderStatus.APPROVED: "✅",
    OrderStatus.ON_THE_WAY: "🚚",
    OrderStatus.DELIVERED: "📦",
    OrderStatus.CANCELLED: "❌",
}


@dataclass
class MarketplaceItem:
    """Catalog item domain model."""
    id: str
    name: str
    description: str
    price_eco_coin: int
    stock: int
    created_at: datetime
    updated_at: datetime


@dataclass
class DeliveryInfo:
    """Delivery details embedded in an order. Keys keep the client's camelCase."""
    fullName: str
    phone: str
    whatsapp: str
    address: str
    city: str
    additionalNotes: Optional[str] = ""

    def missing_fields(self) -> list[str]:
        """Names of required fields that are blank."""
        required = ("fullName", "phone", "whatsapp", "address", "city")
        return [name for name in required if not (getattr(self, name) or "").strip()]

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "DeliveryInfo":
        data = data or {}
        return cls(
            fullName=data.get("fullName", ""),
            phone=data.get("phone", ""),
            whatsapp=data.get("whatsapp", ""),
            address=data.get("address", ""),
            city=data.get("city", ""),
            additionalNotes=data.get("additionalNotes", ""),
        )


@dataclass
class Order:
    """Order domain model. Only status changes after creation."""
    id: str
    user_id: str
    item_id: str
    item_name: str
    price: int
    delivery_info: DeliveryInfo
    status: OrderStatus
    created_at: datetime
    updated_at: datetime

    @property
    def status_emoji(self) -> str:
        return ORDER_STATUS_EMOJI.get(self.status, "📋")
