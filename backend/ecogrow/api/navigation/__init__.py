"""Navigation API routes."""
from fastapi import APIRouter

from ecogrow.api.navigation import routes_navigation

router = APIRouter()

router.include_router(routes_navigation.router, prefix="/navigation", tags=["navigation"])
