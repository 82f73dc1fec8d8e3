"""Admin catalog management."""
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ecogrow.api.deps import get_admin_service, get_current_identity
from ecogrow.api.schemas import MarketplaceItemResponse, NoticeResponse
from ecogrow.domain.admin.services import AdminService
from ecogrow.domain.identity.models import Identity

router = APIRouter()


class ItemCreateRequest(BaseModel):
    """New catalog item."""
    name: str = ""
    description: str = ""
    price_eco_coin: int = 0
    stock: int = 0


class ItemCreateResponse(BaseModel):
    item: MarketplaceItemResponse
    notice: NoticeResponse


@router.get("", response_model=List[MarketplaceItemResponse])
async def list_items(
    identity: Identity = Depends(get_current_identity),
    service: AdminService = Depends(get_admin_service),
):
    """Catalog, newest first."""
    return [MarketplaceItemResponse.from_entity(i) for i in await service.list_items(identity)]


@router.post("", response_model=ItemCreateResponse, status_code=201)
async def create_item(
    request: ItemCreateRequest,
    identity: Identity = Depends(get_current_identity),
    service: AdminService = Depends(get_admin_service),
):
    item, notice = await service.create_item(
        identity,
        name=request.name,
        description=request.description,
        price_eco_coin=request.price_eco_coin,
        stock=request.stock,
    )
    return ItemCreateResponse(
        item=MarketplaceItemResponse.from_entity(item),
        notice=NoticeResponse.from_notice(notice),
    )


@router.delete("/{item_id}", response_model=NoticeResponse)
async def delete_item(
    item_id: str,
    identity: Identity = Depends(get_current_identity),
    service: AdminService = Depends(get_admin_service),
):
    return NoticeResponse.from_notice(await service.delete_item(identity, item_id))
