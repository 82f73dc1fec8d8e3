"""Profile and role resolution."""
import logging
from typing import Optional

from ecogrow.domain.profile.models import Profile, Role
from ecogrow.domain.profile.repositories import ProfileRepository, RoleRepository

logger = logging.getLogger(__name__)


class ProfileService:
    """Loads the signed-in user's profile and evaluates role grants."""

    def __init__(self, profile_repo: ProfileRepository, role_repo: RoleRepository):
        self.profile_repo = profile_repo
        self.role_repo = role_repo

    async def load_profile(self, user_id: Optional[str]) -> Optional[Profile]:
        """Fetch the profile row; absence or failure is logged and yields None."""
        if not user_id:
            return None
        try:
            profile = await self.profile_repo.get_by_id(user_id)
        except Exception as e:
            logger.error("Error loading profile %s: %s", user_id, e)
            return None
        if profile is None:
            logger.error("Error loading profile %s: no profile row", user_id)
        return profile

    async def check_role(self, user_id: Optional[str], role: Role | str) -> bool:
        """True iff a matching role-grant row exists. Any fetch error fails closed."""
        if not user_id:
            return False
        try:
            grant = await self.role_repo.find(user_id, Role(role))
        except Exception as e:
            logger.error("Error checking role %s for %s: %s", role, user_id, e)
            return False
        return grant is not None

    async def is_admin(self, user_id: Optional[str]) -> bool:
        """Shorthand for check_role(user_id, "admin")."""
        return await self.check_role(user_id, Role.ADMIN)
