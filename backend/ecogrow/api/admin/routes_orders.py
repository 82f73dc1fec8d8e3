"""Admin order moderation."""
from typing import Dict, List

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from ecogrow.api.deps import get_admin_service, get_current_identity
from ecogrow.api.schemas import NoticeResponse, OrderResponse
from ecogrow.domain.admin.services import ALL_STATUSES, AdminService
from ecogrow.domain.identity.models import Identity

router = APIRouter()


class OrderListResponse(BaseModel):
    """Filtered orders plus counts over all orders."""
    orders: List[OrderResponse]
    counts: Dict[str, int]
    status_filter: str


class StatusUpdateRequest(BaseModel):
    status: str


class StatusUpdateResponse(BaseModel):
    order: OrderResponse
    notice: NoticeResponse


@router.get("", response_model=OrderListResponse)
async def list_orders(
    status: str = Query(ALL_STATUSES, description='Order status or "all"'),
    identity: Identity = Depends(get_current_identity),
    service: AdminService = Depends(get_admin_service),
):
    listing = await service.list_orders(identity, status)
    return OrderListResponse(
        orders=[OrderResponse.from_entity(o) for o in listing.orders],
        counts=listing.counts,
        status_filter=listing.status_filter,
    )


@router.patch("/{order_id}/status", response_model=StatusUpdateResponse)
async def update_order_status(
    order_id: str,
    request: StatusUpdateRequest,
    identity: Identity = Depends(get_current_identity),
    service: AdminService = Depends(get_admin_service),
):
    """Set any status; transitions are not restricted."""
    order, notice = await service.update_order_status(identity, order_id, request.status)
    return StatusUpdateResponse(
        order=OrderResponse.from_entity(order),
        notice=NoticeResponse.from_notice(notice),
    )
