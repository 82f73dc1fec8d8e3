"""Marketplace API routes."""
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ecogrow.api.deps import (
    get_current_identity,
    get_current_profile,
    get_market_service,
    get_profile_service,
)
from ecogrow.api.schemas import (
    DeliveryInfoModel,
    MarketplaceItemResponse,
    NoticeResponse,
    OrderResponse,
    ProfileResponse,
)
from ecogrow.domain.identity.models import Identity
from ecogrow.domain.market.services import MarketService
from ecogrow.domain.profile.models import Profile
from ecogrow.domain.profile.services import ProfileService

router = APIRouter()


class MarketplaceResponse(BaseModel):
    """Catalog plus the caller's balance."""
    items: List[MarketplaceItemResponse]
    balance: int


class PurchaseRequest(BaseModel):
    """Purchase request."""
    item_id: str
    delivery_info: DeliveryInfoModel


class PurchaseResponse(BaseModel):
    order: OrderResponse
    items: List[MarketplaceItemResponse]
    profile: Optional[ProfileResponse]
    notice: NoticeResponse


@router.get("", response_model=MarketplaceResponse)
async def get_marketplace(
    profile: Profile = Depends(get_current_profile),
    service: MarketService = Depends(get_market_service),
):
    items = await service.list_items()
    return MarketplaceResponse(
        items=[MarketplaceItemResponse.from_entity(i) for i in items],
        balance=profile.eco_coins,
    )


@router.get("/items", response_model=List[MarketplaceItemResponse])
async def list_items(
    identity: Identity = Depends(get_current_identity),
    service: MarketService = Depends(get_market_service),
):
    """Catalog ordered by name."""
    return [MarketplaceItemResponse.from_entity(i) for i in await service.list_items()]


@router.post("/orders", response_model=PurchaseResponse, status_code=201)
async def purchase(
    request: PurchaseRequest,
    identity: Identity = Depends(get_current_identity),
    buyer: Profile = Depends(get_current_profile),
    service: MarketService = Depends(get_market_service),
    profile_service: ProfileService = Depends(get_profile_service),
):
    """Buy one unit; the balance check uses the profile loaded for this request."""
    outcome = await service.purchase(
        identity,
        buyer,
        request.item_id,
        request.delivery_info.to_domain(),
        balance_refresh=lambda: profile_service.load_profile(identity.user_id),
    )
    return PurchaseResponse(
        order=OrderResponse.from_entity(outcome.order),
        items=[MarketplaceItemResponse.from_entity(i) for i in outcome.items],
        profile=ProfileResponse.from_entity(outcome.profile) if outcome.profile else None,
        notice=NoticeResponse.from_notice(outcome.notice),
    )
