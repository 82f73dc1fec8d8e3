"""Buyer order history."""
from typing import List

from fastapi import APIRouter, Depends

from ecogrow.api.deps import get_current_identity, get_market_service
from ecogrow.api.schemas import OrderResponse
from ecogrow.domain.identity.models import Identity
from ecogrow.domain.market.services import MarketService

router = APIRouter()


@router.get("/me", response_model=List[OrderResponse])
async def list_my_orders(
    identity: Identity = Depends(get_current_identity),
    service: MarketService = Depends(get_market_service),
):
    """The caller's orders, newest first, each with its status emoji."""
    orders = await service.list_my_orders(identity)
    return [OrderResponse.from_entity(o) for o in orders]
