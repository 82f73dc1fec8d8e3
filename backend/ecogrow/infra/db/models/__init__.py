"""Database models."""
from ecogrow.infra.db.models.auth import AuthSessionModel, CredentialModel
from ecogrow.infra.db.models.market import MarketplaceItemModel, OrderModel
from ecogrow.infra.db.models.profile import ProfileModel, UserRoleModel
from ecogrow.infra.db.models.tree import TreeModel

__all__ = [
    "AuthSessionModel",
    "CredentialModel",
    "MarketplaceItemModel",
    "OrderModel",
    "ProfileModel",
    "UserRoleModel",
    "TreeModel",
]
