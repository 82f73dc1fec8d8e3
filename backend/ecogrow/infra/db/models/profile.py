"""Profile and role database models."""
from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint

from ecogrow.domain.common.types import utcnow
from ecogrow.domain.profile.models import Profile, Role, RoleGrant
from ecogrow.infra.db.base import Base
from ecogrow.infra.db.models.types import JSONType


class ProfileModel(Base):
    """Profile database model."""

    __tablename__ = "profiles"

    id = Column(String, primary_key=True)
    full_name = Column(String, nullable=False)
    location = Column(String, nullable=True)
    eco_coins = Column(Integer, default=0, nullable=False)  # not clamped; may go negative
    badges = Column(JSONType, nullable=False, default=list)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_entity(self) -> Profile:
        """Convert to domain entity."""
        return Profile(
            id=self.id,
            full_name=self.full_name,
            location=self.location,
            eco_coins=self.eco_coins,
            badges=list(self.badges or []),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_entity(cls, entity: Profile) -> "ProfileModel":
        """Create from domain entity."""
        return cls(
            id=entity.id,
            full_name=entity.full_name,
            location=entity.location,
            eco_coins=entity.eco_coins,
            badges=list(entity.badges or []),
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


class UserRoleModel(Base):
    """Role grant database model."""

    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),)

    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    role = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    def to_entity(self) -> RoleGrant:
        """Convert to domain entity."""
        return RoleGrant(
            id=self.id,
            user_id=self.user_id,
            role=Role(self.role),
            created_at=self.created_at,
        )
