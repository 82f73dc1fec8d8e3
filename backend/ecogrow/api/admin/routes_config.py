"""Config push and reload (config file master over env; push overrides at runtime)."""
from fastapi import APIRouter, Body, Depends, HTTPException, status

from ecogrow.api.deps import get_admin_service, get_current_identity
from ecogrow.domain.admin.services import AdminService
from ecogrow.domain.identity.models import Identity
from ecogrow.settings import get_config_store

router = APIRouter()


async def require_admin(
    identity: Identity = Depends(get_current_identity),
    service: AdminService = Depends(get_admin_service),
) -> Identity:
    await service.require_admin(identity)
    return identity


@router.get("/config", status_code=status.HTTP_200_OK)
async def get_config(identity: Identity = Depends(require_admin)):
    """Current settings (secrets masked) and the overrides pushed so far."""
    store = get_config_store()
    return {"settings": store.snapshot(), "overrides": store.overrides}


@router.post("/config", status_code=status.HTTP_200_OK)
async def update_config(
    body: dict = Body(..., embed=False),
    identity: Identity = Depends(require_admin),
):
    """
    Push config overrides at runtime. Config file remains master over env.
    Validation errors keep the previous config.
    """
    if not get_config_store().update(body):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Config update failed: invalid values",
        )
    return {"ok": True, "message": "Config updated"}


@router.post("/config/reload", status_code=status.HTTP_200_OK)
async def reload_config(identity: Identity = Depends(require_admin)):
    """Re-read the config file and reapply saved overrides."""
    if not get_config_store().reload_from_file():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Config reload failed: invalid values",
        )
    return {"ok": True, "message": "Config reloaded from file"}


@router.post("/config/clear-overrides", status_code=status.HTTP_200_OK)
async def clear_config_overrides(identity: Identity = Depends(require_admin)):
    """Drop pushed overrides and reset to config file + env."""
    get_config_store().clear_overrides()
    return {"ok": True, "message": "Overrides cleared"}
