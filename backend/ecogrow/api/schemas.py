"""Response and request models shared across views."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ecogrow.domain.common.types import Notice
from ecogrow.domain.market.models import DeliveryInfo, MarketplaceItem, Order
from ecogrow.domain.profile.models import Profile, UserRank
from ecogrow.domain.scan.models import Tree


class NoticeResponse(BaseModel):
    """Transient notification."""
    message: str
    type: str = "success"

    @classmethod
    def from_notice(cls, notice: Notice) -> "NoticeResponse":
        return cls(message=notice.message, type=notice.type.value)


class ProfileResponse(BaseModel):
    """Profile response."""
    id: str
    full_name: str
    location: Optional[str] = None
    eco_coins: int
    badges: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, profile: Profile) -> "ProfileResponse":
        return cls(
            id=profile.id,
            full_name=profile.full_name,
            location=profile.location,
            eco_coins=profile.eco_coins,
            badges=list(profile.badges),
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )


class TreeResponse(BaseModel):
    """Tree response."""
    id: str
    user_id: str
    tree_name: str
    growth_level: int
    humidity: int
    soil_condition: str
    total_scans: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, tree: Tree) -> "TreeResponse":
        return cls(
            id=tree.id,
            user_id=tree.user_id,
            tree_name=tree.tree_name,
            growth_level=tree.growth_level,
            humidity=tree.humidity,
            soil_condition=tree.soil_condition.value,
            total_scans=tree.total_scans,
            created_at=tree.created_at,
            updated_at=tree.updated_at,
        )


class RankResponse(BaseModel):
    """get_user_rank result."""
    rank: int
    total_users: int

    @classmethod
    def from_entity(cls, rank: Optional[UserRank]) -> Optional["RankResponse"]:
        if rank is None:
            return None
        return cls(rank=rank.rank, total_users=rank.total_users)


class MarketplaceItemResponse(BaseModel):
    """Catalog item response."""
    id: str
    name: str
    description: str
    price_eco_coin: int
    stock: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, item: MarketplaceItem) -> "MarketplaceItemResponse":
        return cls(
            id=item.id,
            name=item.name,
            description=item.description,
            price_eco_coin=item.price_eco_coin,
            stock=item.stock,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )


class DeliveryInfoModel(BaseModel):
    """Delivery details as the client submits them."""
    fullName: str
    phone: str
    whatsapp: str
    address: str
    city: str
    additionalNotes: Optional[str] = ""

    def to_domain(self) -> DeliveryInfo:
        return DeliveryInfo(
            fullName=self.fullName,
            phone=self.phone,
            whatsapp=self.whatsapp,
            address=self.address,
            city=self.city,
            additionalNotes=self.additionalNotes or "",
        )


class OrderResponse(BaseModel):
    """Order response."""
    id: str
    user_id: str
    item_id: str
    item_name: str
    price: int
    delivery_info: DeliveryInfoModel
    status: str
    status_emoji: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.id,
            user_id=order.user_id,
            item_id=order.item_id,
            item_name=order.item_name,
            price=order.price,
            delivery_info=DeliveryInfoModel(**order.delivery_info.to_dict()),
            status=order.status.value,
            status_emoji=order.status_emoji,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
