"""Tree scan API routes."""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import BaseModel

from ecogrow.api.deps import get_current_identity, get_scan_service
from ecogrow.api.schemas import NoticeResponse, TreeResponse
from ecogrow.domain.identity.models import Identity
from ecogrow.domain.navigation.views import view_after_scan
from ecogrow.domain.scan.services import ScanService

router = APIRouter()


class BonusResponse(BaseModel):
    name: str
    amount: int


class AnalysisResponse(BaseModel):
    growth_quality: str
    humidity_status: str
    soil_quality: str


class ScanResponse(BaseModel):
    """Scan result plus where the client goes next."""
    tree: TreeResponse
    reward: int
    bonuses: List[BonusResponse]
    analysis: AnalysisResponse
    notice: NoticeResponse
    next_view: str


@router.post("", response_model=ScanResponse, status_code=201)
async def scan_tree(
    tree_name: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    identity: Identity = Depends(get_current_identity),
    service: ScanService = Depends(get_scan_service),
):
    """Score an uploaded tree photo and credit the reward.

    Only the first byte of the image is read, to check that one was provided.
    """
    image_bytes = await image.read(1) if image is not None else None
    result = await service.scan_tree(identity, tree_name, image_bytes)
    return ScanResponse(
        tree=TreeResponse.from_entity(result.tree),
        reward=result.reward,
        bonuses=[BonusResponse(name=b.name, amount=b.amount) for b in result.bonuses],
        analysis=AnalysisResponse(
            growth_quality=result.analysis.growth_quality,
            humidity_status=result.analysis.humidity_status,
            soil_quality=result.analysis.soil_quality,
        ),
        notice=NoticeResponse(message=result.message),
        next_view=view_after_scan().value,
    )
