"""View selection for the client shell."""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from ecogrow.api.deps import get_optional_identity, get_profile_service
from ecogrow.domain.identity.models import Identity
from ecogrow.domain.navigation.views import VIEW_LABELS, available_views, resolve_view
from ecogrow.domain.profile.services import ProfileService

router = APIRouter()


class ViewEntry(BaseModel):
    id: str
    label: str


class NavigationResponse(BaseModel):
    """Current view plus the menu the caller may use."""
    current_view: str
    signed_in: bool
    is_admin: bool
    views: list[ViewEntry]


@router.get("", response_model=NavigationResponse)
async def get_navigation(
    view: Optional[str] = Query(None, description="Requested view"),
    identity: Optional[Identity] = Depends(get_optional_identity),
    profile_service: ProfileService = Depends(get_profile_service),
):
    """Resolve the requested view; unreachable views fall back to the default."""
    signed_in = identity is not None
    is_admin = signed_in and await profile_service.is_admin(identity.user_id)
    return NavigationResponse(
        current_view=resolve_view(view, signed_in, is_admin).value,
        signed_in=signed_in,
        is_admin=is_admin,
        views=[ViewEntry(id=v.value, label=VIEW_LABELS[v]) for v in available_views(signed_in, is_admin)],
    )
