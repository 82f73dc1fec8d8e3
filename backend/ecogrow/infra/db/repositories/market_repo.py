"""Marketplace item and order repository implementations."""
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ecogrow.domain.common.types import utcnow
from ecogrow.domain.market.models import MarketplaceItem, Order, OrderStatus
from ecogrow.domain.market.repositories import MarketplaceItemRepository, OrderRepository
from ecogrow.infra.db.models.market import MarketplaceItemModel, OrderModel


class MarketplaceItemRepositoryImpl(MarketplaceItemRepository):
    """Marketplace item repository implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, item: MarketplaceItem) -> MarketplaceItem:
        """Insert an item."""
        model = MarketplaceItemModel.from_entity(item)
        self.session.add(model)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(model)
        return model.to_entity()

    async def get_by_id(self, item_id: str) -> Optional[MarketplaceItem]:
        """Fetch one item."""
        result = await self.session.execute(
            select(MarketplaceItemModel).where(MarketplaceItemModel.id == item_id)
        )
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def list_by_name(self) -> list[MarketplaceItem]:
        """All items ordered by name."""
        result = await self.session.execute(select(MarketplaceItemModel).order_by(MarketplaceItemModel.name))
        return [m.to_entity() for m in result.scalars().all()]

    async def list_newest_first(self) -> list[MarketplaceItem]:
        """All items, newest first."""
        result = await self.session.execute(
            select(MarketplaceItemModel).order_by(MarketplaceItemModel.created_at.desc())
        )
        return [m.to_entity() for m in result.scalars().all()]

    async def set_stock(self, item_id: str, stock: int) -> None:
        """Overwrite the stock count; no floor at zero."""
        try:
            await self.session.execute(
                update(MarketplaceItemModel)
                .where(MarketplaceItemModel.id == item_id)
                .values(stock=stock, updated_at=utcnow())
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def delete(self, item_id: str) -> None:
        """Remove an item unconditionally."""
        try:
            await self.session.execute(delete(MarketplaceItemModel).where(MarketplaceItemModel.id == item_id))
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise


class OrderRepositoryImpl(OrderRepository):
    """Order repository implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, order: Order) -> Order:
        """Insert an order."""
        model = OrderModel.from_entity(order)
        self.session.add(model)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(model)
        return model.to_entity()

    async def get_by_id(self, order_id: str) -> Optional[Order]:
        """Fetch one order."""
        result = await self.session.execute(select(OrderModel).where(OrderModel.id == order_id))
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def list_all(self) -> list[Order]:
        """Every order, newest first."""
        result = await self.session.execute(select(OrderModel).order_by(OrderModel.created_at.desc()))
        return [m.to_entity() for m in result.scalars().all()]

    async def list_by_user(self, user_id: str) -> list[Order]:
        """A buyer's orders, newest first."""
        result = await self.session.execute(
            select(OrderModel)
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc())
        )
        return [m.to_entity() for m in result.scalars().all()]

    async def update_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        """Set the status and return the updated row."""
        try:
            await self.session.execute(
                update(OrderModel)
                .where(OrderModel.id == order_id)
                .values(status=OrderStatus(status).value, updated_at=utcnow())
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return await self.get_by_id(order_id)
