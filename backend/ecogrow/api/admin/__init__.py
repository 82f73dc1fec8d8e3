"""Admin API routes."""
from fastapi import APIRouter

from ecogrow.api.admin import routes_catalog, routes_config, routes_orders, routes_users

router = APIRouter()

router.include_router(routes_orders.router, prefix="/admin/orders", tags=["admin"])
router.include_router(routes_catalog.router, prefix="/admin/items", tags=["admin"])
router.include_router(routes_users.router, prefix="/admin/users", tags=["admin"])
router.include_router(routes_config.router, prefix="/admin", tags=["config"])
