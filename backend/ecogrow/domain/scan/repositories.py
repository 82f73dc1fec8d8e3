"""Tree repository protocol."""
from typing import Protocol

from ecogrow.domain.scan.models import Tree


class TreeRepository(Protocol):
    """Access to the trees collection."""

    async def create(self, tree: Tree) -> Tree:
        """Insert a tree row and return it as stored."""
        ...

    async def list_by_user(self, user_id: str) -> list[Tree]:
        """Trees owned by a user, newest first."""
        ...
