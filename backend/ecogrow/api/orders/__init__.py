"""Orders API routes."""
from fastapi import APIRouter

from ecogrow.api.orders import routes_orders

router = APIRouter()

router.include_router(routes_orders.router, prefix="/orders", tags=["orders"])
