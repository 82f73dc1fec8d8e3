"""Admin moderation: orders, catalog and role management."""
import logging
from dataclasses import dataclass
from typing import Optional

from ecogrow.domain.common.errors import (
    AuthorizationError,
    NotFoundError,
    RemoteCallError,
    ValidationError,
)
from ecogrow.domain.common.types import Notice, generate_id, utcnow
from ecogrow.domain.identity.models import Identity
from ecogrow.domain.market.models import MarketplaceItem, Order, OrderStatus
from ecogrow.domain.market.repositories import MarketplaceItemRepository, OrderRepository
from ecogrow.domain.profile.models import Profile, Role
from ecogrow.domain.profile.repositories import ProfileRepository, RoleRepository
from ecogrow.domain.profile.services import ProfileService

logger = logging.getLogger(__name__)

ALL_STATUSES = "all"


@dataclass
class OrderListing:
    """Filtered orders plus per-status counts over the full list."""
    orders: list[Order]
    counts: dict[str, int]
    status_filter: str


@dataclass
class UserWithRole:
    """A profile annotated with whether it holds the admin role."""
    profile: Profile
    is_admin: bool


def count_by_status(orders: list[Order]) -> dict[str, int]:
    """Counts for "all" and each status, derived in process."""
    counts = {ALL_STATUSES: len(orders)}
    for status in OrderStatus:
        counts[status.value] = sum(1 for o in orders if o.status == status)
    return counts


def filter_by_status(orders: list[Order], status_filter: str) -> list[Order]:
    """Apply the single status filter; "all" keeps everything."""
    if status_filter == ALL_STATUSES:
        return list(orders)
    return [o for o in orders if o.status.value == status_filter]


class AdminService:
    """Admin operations. Each public method checks the caller's admin grant first."""

    def __init__(
        self,
        profile_service: ProfileService,
        order_repo: OrderRepository,
        item_repo: MarketplaceItemRepository,
        profile_repo: ProfileRepository,
        role_repo: RoleRepository,
    ):
        self.profile_service = profile_service
        self.order_repo = order_repo
        self.item_repo = item_repo
        self.profile_repo = profile_repo
        self.role_repo = role_repo

    async def require_admin(self, identity: Optional[Identity]) -> None:
        """Raise unless the caller holds the admin role (fails closed)."""
        if identity is None or not await self.profile_service.is_admin(identity.user_id):
            raise AuthorizationError("Admin access required")

    # Orders
    async def list_orders(self, identity: Optional[Identity], status_filter: str = ALL_STATUSES) -> OrderListing:
        """Fetch every order, then filter and count in process."""
        await self.require_admin(identity)
        valid = {ALL_STATUSES, *(s.value for s in OrderStatus)}
        if status_filter not in valid:
            raise ValidationError(f"Unknown status filter: {status_filter}")
        try:
            orders = await self.order_repo.list_all()
        except Exception as e:
            logger.error("Failed to load orders: %s", e)
            raise RemoteCallError("Failed to load orders", operation="orders.select") from e
        return OrderListing(
            orders=filter_by_status(orders, status_filter),
            counts=count_by_status(orders),
            status_filter=status_filter,
        )

    async def update_order_status(
        self,
        identity: Optional[Identity],
        order_id: str,
        status: OrderStatus | str,
    ) -> tuple[Order, Notice]:
        """Set any status directly; there is no transition check."""
        await self.require_admin(identity)
        try:
            status = OrderStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown order status: {status}") from None
        try:
            order = await self.order_repo.update_status(order_id, status)
        except Exception as e:
            logger.error("Failed to update order %s to %s: %s", order_id, status.value, e)
            raise RemoteCallError("Failed to update status", operation="orders.update") from e
        if order is None:
            raise NotFoundError("Order", order_id)
        logger.info("Order %s set to %s by %s", order_id, status.value, identity.user_id)
        return order, Notice.success(f"Order status updated to: {status.value}")

    # Catalog
    async def list_items(self, identity: Optional[Identity]) -> list[MarketplaceItem]:
        """Catalog, newest first."""
        await self.require_admin(identity)
        try:
            return await self.item_repo.list_newest_first()
        except Exception as e:
            logger.error("Failed to load marketplace items: %s", e)
            raise RemoteCallError("Failed to load marketplace items", operation="marketplace_items.select") from e

    async def create_item(
        self,
        identity: Optional[Identity],
        name: str,
        description: str,
        price_eco_coin: int,
        stock: int = 0,
    ) -> tuple[MarketplaceItem, Notice]:
        """Create a catalog item. Stock is not validated."""
        await self.require_admin(identity)
        if not name or not description or price_eco_coin <= 0:
            raise ValidationError("Please fill all fields correctly")
        now = utcnow()
        try:
            item = await self.item_repo.create(
                MarketplaceItem(
                    id=generate_id(),
                    name=name,
                    description=description,
                    price_eco_coin=price_eco_coin,
                    stock=stock,
                    created_at=now,
                    updated_at=now,
                )
            )
        except Exception as e:
            logger.error("Failed to create marketplace item %r: %s", name, e)
            raise RemoteCallError("Failed to create marketplace item", operation="marketplace_items.insert") from e
        return item, Notice.success("Marketplace item created successfully")

    async def delete_item(self, identity: Optional[Identity], item_id: str) -> Notice:
        """Delete unconditionally; orders that reference the item are left alone."""
        await self.require_admin(identity)
        try:
            await self.item_repo.delete(item_id)
        except Exception as e:
            logger.error("Failed to delete marketplace item %s: %s", item_id, e)
            raise RemoteCallError("Failed to delete item", operation="marketplace_items.delete") from e
        return Notice.success("Marketplace item deleted")

    # Users
    async def list_users(self, identity: Optional[Identity]) -> list[UserWithRole]:
        """All profiles, newest first, with the admin flag from the grant rows."""
        await self.require_admin(identity)
        try:
            profiles = await self.profile_repo.list_newest_first()
            grants = await self.role_repo.list_by_role(Role.ADMIN)
        except Exception as e:
            logger.error("Failed to load users: %s", e)
            raise RemoteCallError("Failed to load users", operation="profiles.select") from e
        admins = {g.user_id for g in grants}
        return [UserWithRole(profile=p, is_admin=p.id in admins) for p in profiles]

    async def toggle_admin_role(
        self,
        identity: Optional[Identity],
        user_id: str,
        is_currently_admin: bool,
    ) -> Notice:
        """Revoke when the client says the user is admin, grant otherwise."""
        await self.require_admin(identity)
        try:
            if is_currently_admin:
                await self.role_repo.revoke(user_id, Role.ADMIN)
                notice = Notice.success("Admin role removed")
            else:
                await self.role_repo.grant(user_id, Role.ADMIN)
                notice = Notice.success("Admin role granted")
        except Exception as e:
            logger.error("Failed to update admin role for %s: %s", user_id, e)
            raise RemoteCallError("Failed to update admin role", operation="user_roles.write") from e
        logger.info("%s by %s for %s", notice.message, identity.user_id, user_id)
        return notice
