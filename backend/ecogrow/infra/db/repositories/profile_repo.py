"""Profile and role repository implementations."""
from typing import Optional

from sqlalchemy import and_, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ecogrow.domain.common.types import generate_id, utcnow
from ecogrow.domain.profile.models import Profile, Role, RoleGrant, UserRank
from ecogrow.domain.profile.repositories import ProfileRepository, RoleRepository
from ecogrow.infra.db.models.profile import ProfileModel, UserRoleModel


class ProfileRepositoryImpl(ProfileRepository):
    """Profile repository implementation.

    A failed write rolls the session back so later calls on the same
    request session still run.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, profile: Profile) -> Profile:
        """Insert a profile row."""
        model = ProfileModel.from_entity(profile)
        self.session.add(model)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(model)
        return model.to_entity()

    async def get_by_id(self, user_id: str) -> Optional[Profile]:
        """Fetch exactly one profile row, or None."""
        result = await self.session.execute(select(ProfileModel).where(ProfileModel.id == user_id))
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def list_by_coins(self) -> list[Profile]:
        """Leaderboard order: eco_coins desc, then created_at asc."""
        result = await self.session.execute(
            select(ProfileModel).order_by(
                ProfileModel.eco_coins.desc(),
                ProfileModel.created_at.asc(),
                ProfileModel.id.asc(),
            )
        )
        return [m.to_entity() for m in result.scalars().all()]

    async def list_newest_first(self) -> list[Profile]:
        """All profiles, newest first."""
        result = await self.session.execute(select(ProfileModel).order_by(ProfileModel.created_at.desc()))
        return [m.to_entity() for m in result.scalars().all()]

    async def set_eco_coins(self, user_id: str, eco_coins: int) -> None:
        """Overwrite the balance (non-atomic with any earlier read)."""
        try:
            await self.session.execute(
                update(ProfileModel)
                .where(ProfileModel.id == user_id)
                .values(eco_coins=eco_coins, updated_at=utcnow())
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def increment_eco_coins(self, user_id: str, amount: int) -> None:
        """Single UPDATE ... SET eco_coins = eco_coins + :amount."""
        try:
            await self.session.execute(
                update(ProfileModel)
                .where(ProfileModel.id == user_id)
                .values(eco_coins=ProfileModel.eco_coins + amount, updated_at=utcnow())
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def get_user_rank(self, user_id: str) -> Optional[UserRank]:
        """1-based position in leaderboard order, with the total profile count."""
        me = await self.session.execute(
            select(ProfileModel.eco_coins, ProfileModel.created_at, ProfileModel.id).where(ProfileModel.id == user_id)
        )
        row = me.one_or_none()
        if row is None:
            return None
        coins, created_at, pid = row
        ahead = await self.session.execute(
            select(func.count()).select_from(ProfileModel).where(
                or_(
                    ProfileModel.eco_coins > coins,
                    and_(ProfileModel.eco_coins == coins, ProfileModel.created_at < created_at),
                    and_(
                        ProfileModel.eco_coins == coins,
                        ProfileModel.created_at == created_at,
                        ProfileModel.id < pid,
                    ),
                )
            )
        )
        total = await self.session.execute(select(func.count()).select_from(ProfileModel))
        return UserRank(rank=ahead.scalar_one() + 1, total_users=total.scalar_one())


class RoleRepositoryImpl(RoleRepository):
    """Role grant repository implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find(self, user_id: str, role: Role) -> Optional[RoleGrant]:
        """Return the matching grant row, if any."""
        result = await self.session.execute(
            select(UserRoleModel).where(
                UserRoleModel.user_id == user_id,
                UserRoleModel.role == Role(role).value,
            )
        )
        model = result.scalars().first()
        return model.to_entity() if model else None

    async def list_by_role(self, role: Role) -> list[RoleGrant]:
        """All grants for a role."""
        result = await self.session.execute(
            select(UserRoleModel).where(UserRoleModel.role == Role(role).value)
        )
        return [m.to_entity() for m in result.scalars().all()]

    async def grant(self, user_id: str, role: Role) -> RoleGrant:
        """Insert a grant row; a duplicate fails on the unique constraint."""
        model = UserRoleModel(
            id=generate_id(),
            user_id=user_id,
            role=Role(role).value,
            created_at=utcnow(),
        )
        self.session.add(model)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(model)
        return model.to_entity()

    async def revoke(self, user_id: str, role: Role) -> None:
        """Delete grant rows for the pair."""
        try:
            await self.session.execute(
                delete(UserRoleModel).where(
                    UserRoleModel.user_id == user_id,
                    UserRoleModel.role == Role(role).value,
                )
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
