"""Dashboard: the user's trees, rank and the leaderboard."""
import logging
import math
from dataclasses import dataclass
from typing import Optional

from ecogrow.domain.common.errors import AuthenticationError, RemoteCallError
from ecogrow.domain.identity.models import Identity
from ecogrow.domain.profile.models import Profile, UserRank
from ecogrow.domain.profile.repositories import ProfileRepository
from ecogrow.domain.scan.models import Tree
from ecogrow.domain.scan.repositories import TreeRepository

logger = logging.getLogger(__name__)


@dataclass
class DashboardSummary:
    """Everything the dashboard view shows."""
    profile: Profile
    trees: list[Tree]
    total_trees: int
    average_growth: int
    rank: Optional[UserRank]
    leaderboard: list[Profile]


def average_growth(trees: list[Tree]) -> int:
    """Mean growth level rounded half up; 0 with no trees."""
    if not trees:
        return 0
    return math.floor(sum(t.growth_level for t in trees) / len(trees) + 0.5)


class DashboardService:
    """Read-only loaders. Rank and leaderboard failures are logged, never raised."""

    def __init__(self, tree_repo: TreeRepository, profile_repo: ProfileRepository):
        self.tree_repo = tree_repo
        self.profile_repo = profile_repo

    async def list_trees(self, identity: Optional[Identity]) -> list[Tree]:
        """The caller's trees, newest first."""
        if identity is None:
            raise AuthenticationError()
        try:
            return await self.tree_repo.list_by_user(identity.user_id)
        except Exception as e:
            logger.error("Failed to load trees for %s: %s", identity.user_id, e)
            raise RemoteCallError("Failed to load trees", operation="trees.select") from e

    async def get_rank(self, user_id: str) -> Optional[UserRank]:
        """get_user_rank procedure; None when unavailable."""
        try:
            return await self.profile_repo.get_user_rank(user_id)
        except Exception as e:
            logger.error("Failed to load rank for %s: %s", user_id, e)
            return None

    async def leaderboard(self) -> list[Profile]:
        """All profiles by balance, ties broken by sign-up order."""
        try:
            return await self.profile_repo.list_by_coins()
        except Exception as e:
            logger.error("Failed to load leaderboard: %s", e)
            return []

    async def summary(self, identity: Optional[Identity], profile: Profile) -> DashboardSummary:
        """Trees, rank and leaderboard for the signed-in user."""
        trees = await self.list_trees(identity)
        return DashboardSummary(
            profile=profile,
            trees=trees,
            total_trees=len(trees),
            average_growth=average_growth(trees),
            rank=await self.get_rank(identity.user_id),
            leaderboard=await self.leaderboard(),
        )
