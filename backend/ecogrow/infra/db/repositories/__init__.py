"""Repository implementations backed by the data service's database."""
from ecogrow.infra.db.repositories.auth_repo import AuthRepositoryImpl
from ecogrow.infra.db.repositories.market_repo import MarketplaceItemRepositoryImpl, OrderRepositoryImpl
from ecogrow.infra.db.repositories.profile_repo import ProfileRepositoryImpl, RoleRepositoryImpl
from ecogrow.infra.db.repositories.tree_repo import TreeRepositoryImpl

__all__ = [
    "AuthRepositoryImpl",
    "MarketplaceItemRepositoryImpl",
    "OrderRepositoryImpl",
    "ProfileRepositoryImpl",
    "RoleRepositoryImpl",
    "TreeRepositoryImpl",
]
