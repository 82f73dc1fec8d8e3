"""Tree database model."""
from sqlalchemy import Column, DateTime, Integer, String

from ecogrow.domain.common.types import utcnow
from ecogrow.domain.scan.models import SoilCondition, Tree
from ecogrow.infra.db.base import Base


class TreeModel(Base):
    """Tree database model."""

    __tablename__ = "trees"

    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    tree_name = Column(String, nullable=False)
    growth_level = Column(Integer, nullable=False)
    humidity = Column(Integer, nullable=False)
    soil_condition = Column(String, nullable=False)
    total_scans = Column(Integer, default=1, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_entity(self) -> Tree:
        """Convert to domain entity."""
        return Tree(
            id=self.id,
            user_id=self.user_id,
            tree_name=self.tree_name,
            growth_level=self.growth_level,
            humidity=self.humidity,
            soil_condition=SoilCondition(self.soil_condition),
            total_scans=self.total_scans,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_entity(cls, entity: Tree) -> "TreeModel":
        """Create from domain entity."""
        return cls(
            id=entity.id,
            user_id=entity.user_id,
            tree_name=entity.tree_name,
            growth_level=entity.growth_level,
            humidity=entity.humidity,
            soil_condition=SoilCondition(entity.soil_condition).value,
            total_scans=entity.total_scans,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
