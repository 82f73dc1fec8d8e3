"""Scan service: turns a tree name and an image into a tree row and an EcoCoin credit."""
import logging
import random
from typing import Optional

from ecogrow.domain.common.errors import AuthenticationError, RemoteCallError, ValidationError
from ecogrow.domain.common.types import generate_id, utcnow
from ecogrow.domain.identity.models import Identity
from ecogrow.domain.profile.repositories import ProfileRepository
from ecogrow.domain.scan.models import ScanResult, Tree
from ecogrow.domain.scan.repositories import TreeRepository
from ecogrow.domain.scan.scoring import ScoringFunction, random_scoring

logger = logging.getLogger(__name__)

SCAN_COMPLETE_MESSAGE = "Tree analysis complete! 🌳"


class ScanService:
    """Runs a scan as a sequence of independent remote calls.

    Nothing is rolled back: if the tree insert succeeds and the credit then
    fails, the tree stays without the coins.
    """

    def __init__(
        self,
        tree_repo: TreeRepository,
        profile_repo: ProfileRepository,
        rng: Optional[random.Random] = None,
        scoring: ScoringFunction = random_scoring,
    ):
        self.tree_repo = tree_repo
        self.profile_repo = profile_repo
        self.rng = rng or random.Random()
        self.scoring = scoring

    async def scan_tree(
        self,
        identity: Optional[Identity],
        tree_name: Optional[str],
        image: Optional[bytes],
    ) -> ScanResult:
        """Generate metrics, persist the tree and credit the reward."""
        if not image:
            raise ValidationError("Please upload an image first!")
        name = (tree_name or "").strip()
        if not name:
            raise ValidationError("Please enter a tree name!")

        metrics = self.scoring(self.rng)

        if identity is None:
            raise AuthenticationError()

        now = utcnow()
        try:
            tree = await self.tree_repo.create(
                Tree(
                    id=generate_id(),
                    user_id=identity.user_id,
                    tree_name=name,
                    growth_level=metrics.growth,
                    humidity=metrics.humidity,
                    soil_condition=metrics.soil_condition,
                    total_scans=1,
                    created_at=now,
                    updated_at=now,
                )
            )
        except Exception as e:
            logger.error("Tree insert failed for %s: %s", identity.user_id, e)
            raise RemoteCallError(str(e) or "Scan failed", operation="trees.insert") from e

        await self._credit(identity.user_id, metrics.reward)

        logger.info(
            "Scan by %s: tree=%s growth=%s humidity=%s soil=%s reward=%s",
            identity.user_id,
            tree.id,
            metrics.growth,
            metrics.humidity,
            metrics.soil_condition.value,
            metrics.reward,
        )
        return ScanResult(
            tree=tree,
            reward=metrics.reward,
            bonuses=metrics.bonuses,
            message=SCAN_COMPLETE_MESSAGE,
            analysis=metrics.analysis,
        )

    async def _credit(self, user_id: str, amount: int) -> None:
        """Atomic increment first; on failure, a non-atomic read-then-write."""
        try:
            await self.profile_repo.increment_eco_coins(user_id, amount)
            return
        except Exception as e:
            logger.warning("increment_eco_coins failed for %s, falling back to read-then-write: %s", user_id, e)

        try:
            profile = await self.profile_repo.get_by_id(user_id)
        except Exception as e:
            logger.error("Fallback balance read failed for %s: %s", user_id, e)
            return
        if profile is None:
            logger.error("Fallback credit skipped: no profile row for %s", user_id)
            return
        try:
            await self.profile_repo.set_eco_coins(user_id, profile.eco_coins + amount)
        except Exception as e:
            logger.error("Fallback balance write failed for %s: %s", user_id, e)
