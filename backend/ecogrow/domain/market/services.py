"""Market domain services."""
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from ecogrow.domain.common.errors import (
    AuthenticationError,
    NotFoundError,
    RemoteCallError,
    ValidationError,
)
from ecogrow.domain.common.types import Notice, generate_id, utcnow
from ecogrow.domain.identity.models import Identity
from ecogrow.domain.market.models import DeliveryInfo, MarketplaceItem, Order, OrderStatus
from ecogrow.domain.market.repositories import MarketplaceItemRepository, OrderRepository
from ecogrow.domain.profile.models import Profile
from ecogrow.domain.profile.repositories import ProfileRepository

logger = logging.getLogger(__name__)

ORDER_PLACED_MESSAGE = 'Order placed successfully! Check "My Orders" for tracking.'

BalanceRefresh = Callable[[], Awaitable[Optional[Profile]]]


@dataclass
class PurchaseOutcome:
    """Result of a successful purchase."""
    order: Order
    items: list[MarketplaceItem]
    profile: Optional[Profile]
    notice: Notice


class MarketService:
    """Catalog browsing, buyer order history and the order settlement flow."""

    def __init__(
        self,
        item_repo: MarketplaceItemRepository,
        order_repo: OrderRepository,
        profile_repo: ProfileRepository,
    ):
        self.item_repo = item_repo
        self.order_repo = order_repo
        self.profile_repo = profile_repo

    async def list_items(self) -> list[MarketplaceItem]:
        """Catalog ordered by name."""
        try:
            return await self.item_repo.list_by_name()
        except Exception as e:
            logger.error("Failed to load marketplace items: %s", e)
            raise RemoteCallError("Failed to load items", operation="marketplace_items.select") from e

    async def list_my_orders(self, identity: Optional[Identity]) -> list[Order]:
        """The caller's orders, newest first."""
        if identity is None:
            raise AuthenticationError()
        try:
            return await self.order_repo.list_by_user(identity.user_id)
        except Exception as e:
            logger.error("Failed to load orders for %s: %s", identity.user_id, e)
            raise RemoteCallError("Failed to load orders", operation="orders.select") from e

    async def purchase(
        self,
        identity: Optional[Identity],
        buyer: Optional[Profile],
        item_id: str,
        delivery_info: DeliveryInfo,
        balance_refresh: Optional[BalanceRefresh] = None,
    ) -> PurchaseOutcome:
        """Place an order for one unit of an item.

        ``buyer`` is the profile the caller loaded before submitting; its
        balance is trusted as-is. The three writes below are independent and
        the first failure aborts without undoing the earlier ones. Two
        concurrent purchases can both pass the checks, so stock can go
        negative and a balance can be debited twice from the same stale read.
        """
        if identity is None:
            raise AuthenticationError()
        if buyer is None:
            raise NotFoundError("Profile", identity.user_id)

        try:
            item = await self.item_repo.get_by_id(item_id)
        except Exception as e:
            logger.error("Failed to load item %s: %s", item_id, e)
            raise RemoteCallError(str(e) or "Failed to place order", operation="marketplace_items.select") from e
        if item is None:
            raise NotFoundError("Marketplace item", item_id)

        if buyer.eco_coins < item.price_eco_coin:
            raise ValidationError("Insufficient EcoCoins")
        if item.stock <= 0:
            raise ValidationError("Out of stock")
        missing = delivery_info.missing_fields()
        if missing:
            raise ValidationError(f"Please fill in all delivery details: {', '.join(missing)}")

        now = utcnow()
        try:
            order = await self.order_repo.create(
                Order(
                    id=generate_id(),
                    user_id=identity.user_id,
                    item_id=item.id,
                    item_name=item.name,
                    price=item.price_eco_coin,
                    delivery_info=delivery_info,
                    status=OrderStatus.PENDING,
                    created_at=now,
                    updated_at=now,
                )
            )
        except Exception as e:
            logger.error("Order insert failed for %s, item %s: %s", identity.user_id, item.id, e)
            raise RemoteCallError(str(e) or "Failed to place order", operation="orders.insert") from e

        try:
            await self.profile_repo.set_eco_coins(identity.user_id, buyer.eco_coins - item.price_eco_coin)
        except Exception as e:
            logger.warning("Order %s created but balance debit failed for %s: %s", order.id, identity.user_id, e)
            raise RemoteCallError(str(e) or "Failed to place order", operation="profiles.update") from e

        try:
            await self.item_repo.set_stock(item.id, item.stock - 1)
        except Exception as e:
            logger.warning("Order %s created and balance debited but stock update failed for item %s: %s", order.id, item.id, e)
            raise RemoteCallError(str(e) or "Failed to place order", operation="marketplace_items.update") from e

        logger.info(
            "Order %s placed by %s for %s (%s EcoCoins)",
            order.id,
            identity.user_id,
            item.name,
            item.price_eco_coin,
        )

        try:
            items = await self.list_items()
        except RemoteCallError:
            items = []
        profile = await balance_refresh() if balance_refresh else None
        return PurchaseOutcome(
            order=order,
            items=items,
            profile=profile,
            notice=Notice.success(ORDER_PLACED_MESSAGE),
        )
