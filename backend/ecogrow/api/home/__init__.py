"""Home API routes."""
from fastapi import APIRouter

from ecogrow.api.home import routes_home

router = APIRouter()

router.include_router(routes_home.router, prefix="/home", tags=["home"])
