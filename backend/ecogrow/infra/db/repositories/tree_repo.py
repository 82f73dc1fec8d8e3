"""Tree repository implementation."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ecogrow.domain.scan.models import Tree
from ecogrow.domain.scan.repositories import TreeRepository
from ecogrow.infra.db.models.tree import TreeModel


class TreeRepositoryImpl(TreeRepository):
    """Tree repository implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, tree: Tree) -> Tree:
        """Insert a tree row and return it as stored."""
        model = TreeModel.from_entity(tree)
        self.session.add(model)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(model)
        return model.to_entity()

    async def list_by_user(self, user_id: str) -> list[Tree]:
        """Trees owned by a user, newest first."""
        result = await self.session.execute(
            select(TreeModel)
            .where(TreeModel.user_id == user_id)
            .order_by(TreeModel.created_at.desc())
        )
        return [m.to_entity() for m in result.scalars().all()]
