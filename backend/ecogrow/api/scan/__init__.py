"""Scan API routes."""
from fastapi import APIRouter

from ecogrow.api.scan import routes_scan

router = APIRouter()

router.include_router(routes_scan.router, prefix="/scan", tags=["scan"])
