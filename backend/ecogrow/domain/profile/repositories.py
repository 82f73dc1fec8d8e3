"""Profile and role repository protocols."""
from typing import Optional, Protocol

from ecogrow.domain.profile.models import Profile, Role, RoleGrant, UserRank


class ProfileRepository(Protocol):
    """Access to the profiles collection and the two balance/rank procedures."""

    async def create(self, profile: Profile) -> Profile:
        """Insert a profile row."""
        ...

    async def get_by_id(self, user_id: str) -> Optional[Profile]:
        """Fetch exactly one profile row, or None."""
        ...

    async def list_by_coins(self) -> list[Profile]:
        """All profiles, eco_coins descending then created_at ascending."""
        ...

    async def list_newest_first(self) -> list[Profile]:
        """All profiles, newest first."""
        ...

    async def set_eco_coins(self, user_id: str, eco_coins: int) -> None:
        """Overwrite the balance with an absolute value."""
        ...

    async def increment_eco_coins(self, user_id: str, amount: int) -> None:
        """Atomic server-side increment by a signed amount (increment_eco_coins)."""
        ...

    async def get_user_rank(self, user_id: str) -> Optional[UserRank]:
        """Server-side rank aggregate (get_user_rank)."""
        ...


class RoleRepository(Protocol):
    """Access to the user_roles collection."""

    async def find(self, user_id: str, role: Role) -> Optional[RoleGrant]:
        """Return the matching grant row, if any."""
        ...

    async def list_by_role(self, role: Role) -> list[RoleGrant]:
        """All grants for a role."""
        ...

    async def grant(self, user_id: str, role: Role) -> RoleGrant:
        """Insert a grant row."""
        ...

    async def revoke(self, user_id: str, role: Role) -> None:
        """Delete grant rows for the pair (no-op if absent)."""
        ...
