"""Dashboard API routes."""
from fastapi import APIRouter

from ecogrow.api.dashboard import routes_dashboard

router = APIRouter()

router.include_router(routes_dashboard.router, prefix="/dashboard", tags=["dashboard"])
