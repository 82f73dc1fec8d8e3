"""Marketplace and order repository protocols."""
from typing import Optional, Protocol

from ecogrow.domain.market.models import MarketplaceItem, Order, OrderStatus


class MarketplaceItemRepository(Protocol):
    """Access to the marketplace_items collection."""

    async def create(self, item: MarketplaceItem) -> MarketplaceItem:
        """Insert an item."""
        ...

    async def get_by_id(self, item_id: str) -> Optional[MarketplaceItem]:
        """Fetch one item."""
        ...

    async def list_by_name(self) -> list[MarketplaceItem]:
        """All items ordered by name (shop view)."""
        ...

    async def list_newest_first(self) -> list[MarketplaceItem]:
        """All items, newest first (admin view)."""
        ...

    async def set_stock(self, item_id: str, stock: int) -> None:
        """Overwrite the stock count with an absolute value."""
        ...

    async def delete(self, item_id: str) -> None:
        """Remove an item unconditionally."""
        ...


class OrderRepository(Protocol):
    """Access to the orders collection."""

    async def create(self, order: Order) -> Order:
        """Insert an order."""
        ...

    async def get_by_id(self, order_id: str) -> Optional[Order]:
        """Fetch one order."""
        ...

    async def list_all(self) -> list[Order]:
        """Every order, newest first."""
        ...

    async def list_by_user(self, user_id: str) -> list[Order]:
        """A buyer's orders, newest first."""
        ...

    async def update_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        """Set the status and return the updated row (None if it does not exist)."""
        ...
