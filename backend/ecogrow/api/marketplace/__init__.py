"""Marketplace API routes."""
from fastapi import APIRouter

from ecogrow.api.marketplace import routes_marketplace

router = APIRouter()

router.include_router(routes_marketplace.router, prefix="/marketplace", tags=["marketplace"])
