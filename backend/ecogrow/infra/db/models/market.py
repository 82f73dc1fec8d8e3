"""Marketplace and order database models."""
from sqlalchemy import Column, DateTime, Integer, String, Text

from ecogrow.domain.common.types import utcnow
from ecogrow.domain.market.models import DeliveryInfo, MarketplaceItem, Order, OrderStatus
from ecogrow.infra.db.base import Base
from ecogrow.infra.db.models.types import JSONType


class MarketplaceItemModel(Base):
    """Catalog item database model."""

    __tablename__ = "marketplace_items"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False)
    price_eco_coin = Column(Integer, nullable=False)
    stock = Column(Integer, default=0, nullable=False)  # not clamped; concurrent buys can push it below zero
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_entity(self) -> MarketplaceItem:
        """Convert to domain entity."""
        return MarketplaceItem(
            id=self.id,
            name=self.name,
            description=self.description,
            price_eco_coin=self.price_eco_coin,
            stock=self.stock,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_entity(cls, entity: MarketplaceItem) -> "MarketplaceItemModel":
        """Create from domain entity."""
        return cls(
            id=entity.id,
            name=entity.name,
            description=entity.description,
            price_eco_coin=entity.price_eco_coin,
            stock=entity.stock,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


class OrderModel(Base):
    """Order database model. item_id is not a foreign key: items can be deleted under their orders."""

    __tablename__ = "orders"

    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    item_id = Column(String, nullable=False)
    item_name = Column(String, nullable=False)
    price = Column(Integer, nullable=False)
    delivery_info = Column(JSONType, nullable=False)
    status = Column(String, nullable=False, default=OrderStatus.PENDING.value, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_entity(self) -> Order:
        """Convert to domain entity."""
        return Order(
            id=self.id,
            user_id=self.user_id,
            item_id=self.item_id,
            item_name=self.item_name,
            price=self.price,
            delivery_info=DeliveryInfo.from_dict(self.delivery_info),
            status=OrderStatus(self.status),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_entity(cls, entity: Order) -> "OrderModel":
        """Create from domain entity."""
        return cls(
            id=entity.id,
            user_id=entity.user_id,
            item_id=entity.item_id,
            item_name=entity.item_name,
            price=entity.price,
            delivery_info=entity.delivery_info.to_dict(),
            status=OrderStatus(entity.status).value,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
