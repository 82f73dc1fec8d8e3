"""Admin user and role management."""
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ecogrow.api.deps import get_admin_service, get_current_identity
from ecogrow.api.schemas import NoticeResponse, ProfileResponse
from ecogrow.domain.admin.services import AdminService
from ecogrow.domain.identity.models import Identity

router = APIRouter()


class UserResponse(BaseModel):
    profile: ProfileResponse
    is_admin: bool


class RoleToggleRequest(BaseModel):
    """The admin flag as the client currently sees it."""
    is_currently_admin: bool


@router.get("", response_model=List[UserResponse])
async def list_users(
    identity: Identity = Depends(get_current_identity),
    service: AdminService = Depends(get_admin_service),
):
    users = await service.list_users(identity)
    return [UserResponse(profile=ProfileResponse.from_entity(u.profile), is_admin=u.is_admin) for u in users]


@router.post("/{user_id}/admin-role", response_model=NoticeResponse)
async def toggle_admin_role(
    user_id: str,
    request: RoleToggleRequest,
    identity: Identity = Depends(get_current_identity),
    service: AdminService = Depends(get_admin_service),
):
    """Revoke when currently admin, grant otherwise."""
    notice = await service.toggle_admin_role(identity, user_id, request.is_currently_admin)
    return NoticeResponse.from_notice(notice)
