"""Dashboard API routes."""
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ecogrow.api.deps import get_current_identity, get_current_profile, get_dashboard_service
from ecogrow.api.schemas import ProfileResponse, RankResponse, TreeResponse
from ecogrow.domain.dashboard.services import DashboardService
from ecogrow.domain.identity.models import Identity
from ecogrow.domain.profile.models import Profile

router = APIRouter()


class LeaderboardEntry(BaseModel):
    position: int
    user_id: str
    full_name: str
    eco_coins: int
    is_current_user: bool


class DashboardResponse(BaseModel):
    """Dashboard summary."""
    profile: ProfileResponse
    trees: List[TreeResponse]
    total_trees: int
    average_growth: int
    rank: Optional[RankResponse]
    leaderboard: List[LeaderboardEntry]


def _leaderboard(profiles: List[Profile], current_user_id: str) -> List[LeaderboardEntry]:
    return [
        LeaderboardEntry(
            position=i,
            user_id=p.id,
            full_name=p.full_name,
            eco_coins=p.eco_coins,
            is_current_user=p.id == current_user_id,
        )
        for i, p in enumerate(profiles, start=1)
    ]


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    identity: Identity = Depends(get_current_identity),
    profile: Profile = Depends(get_current_profile),
    service: DashboardService = Depends(get_dashboard_service),
):
    """Trees, stats, rank and leaderboard for the signed-in user."""
    summary = await service.summary(identity, profile)
    return DashboardResponse(
        profile=ProfileResponse.from_entity(summary.profile),
        trees=[TreeResponse.from_entity(t) for t in summary.trees],
        total_trees=summary.total_trees,
        average_growth=summary.average_growth,
        rank=RankResponse.from_entity(summary.rank),
        leaderboard=_leaderboard(summary.leaderboard, identity.user_id),
    )


@router.get("/trees", response_model=List[TreeResponse])
async def list_my_trees(
    identity: Identity = Depends(get_current_identity),
    service: DashboardService = Depends(get_dashboard_service),
):
    trees = await service.list_trees(identity)
    return [TreeResponse.from_entity(t) for t in trees]


@router.get("/rank", response_model=Optional[RankResponse])
async def get_my_rank(
    identity: Identity = Depends(get_current_identity),
    service: DashboardService = Depends(get_dashboard_service),
):
    """Rank among all profiles; null when the rank lookup fails."""
    return RankResponse.from_entity(await service.get_rank(identity.user_id))


@router.get("/leaderboard", response_model=List[LeaderboardEntry])
async def get_leaderboard(
    identity: Identity = Depends(get_current_identity),
    service: DashboardService = Depends(get_dashboard_service),
):
    return _leaderboard(await service.leaderboard(), identity.user_id)
