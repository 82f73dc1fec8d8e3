"""Tests for dashboard loaders: trees, rank and leaderboard."""
from datetime import datetime, timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from ecogrow.domain.common.errors import RemoteCallError
from ecogrow.domain.common.types import generate_id
from ecogrow.domain.dashboard.services import DashboardService, average_growth
from ecogrow.domain.identity.models import Identity
from ecogrow.domain.scan.models import SoilCondition, Tree
from ecogrow.infra.db.repositories import ProfileRepositoryImpl, TreeRepositoryImpl

from conftest import make_profile
from fakes import FailingRepo


def make_tree(user_id: str, growth: int, created_at: datetime, name: str = "Oak") -> Tree:
    return Tree(
        id=generate_id(),
        user_id=user_id,
        tree_name=name,
        growth_level=growth,
        humidity=60,
        soil_condition=SoilCondition.GOOD,
        total_scans=1,
        created_at=created_at,
        updated_at=created_at,
    )


@pytest.fixture
def dashboard(db_session: AsyncSession):
    return DashboardService(TreeRepositoryImpl(db_session), ProfileRepositoryImpl(db_session))


class TestRankAndLeaderboard:
    """Ordering is by balance, then sign-up time."""

    async def test_leaderboard_order(self, dashboard: DashboardService, profiles: dict):
        names = [p.full_name for p in await dashboard.leaderboard()]
        assert names == ["Bob", "Alice", "Carol"]

    async def test_rank_matches_leaderboard_position(self, dashboard: DashboardService, profiles: dict):
        board = await dashboard.leaderboard()
        for position, profile in enumerate(board, start=1):
            rank = await dashboard.get_rank(profile.id)
            assert rank.rank == position
            assert rank.total_users == 3

    async def test_rank_tie_goes_to_earlier_signup(self, dashboard: DashboardService, profiles: dict):
        assert (await dashboard.get_rank(profiles["alice"].id)).rank == 2
        assert (await dashboard.get_rank(profiles["carol"].id)).rank == 3

    async def test_rank_of_unknown_user(self, dashboard: DashboardService, profiles: dict):
        assert await dashboard.get_rank("nobody") is None

    async def test_rank_moves_with_balance(self, db_session: AsyncSession, dashboard: DashboardService, profiles: dict):
        await ProfileRepositoryImpl(db_session).increment_eco_coins(profiles["carol"].id, 500)
        assert (await dashboard.get_rank(profiles["carol"].id)).rank == 1
        assert (await dashboard.get_rank(profiles["bob"].id)).rank == 2

    async def test_loaders_are_idempotent(self, dashboard: DashboardService, profiles: dict):
        assert await dashboard.leaderboard() == await dashboard.leaderboard()
        alice_id = profiles["alice"].id
        assert await dashboard.get_rank(alice_id) == await dashboard.get_rank(alice_id)

    async def test_rank_failure_is_none(self, db_session: AsyncSession, profiles: dict):
        service = DashboardService(
            TreeRepositoryImpl(db_session),
            FailingRepo(ProfileRepositoryImpl(db_session), "get_user_rank"),
        )
        assert await service.get_rank(profiles["alice"].id) is None

    async def test_leaderboard_failure_is_empty(self, db_session: AsyncSession, profiles: dict):
        service = DashboardService(
            TreeRepositoryImpl(db_session),
            FailingRepo(ProfileRepositoryImpl(db_session), "list_by_coins"),
        )
        assert await service.leaderboard() == []

    async def test_new_profile_with_zero_coins_ranks_last(self, db_session: AsyncSession, dashboard: DashboardService, profiles: dict):
        newcomer = await ProfileRepositoryImpl(db_session).create(make_profile("Dan", 0))
        rank = await dashboard.get_rank(newcomer.id)
        assert rank.rank == 4
        assert rank.total_users == 4


class TestTreesAndSummary:
    """Tree listing and derived stats."""

    async def test_trees_newest_first_and_own_only(self, db_session: AsyncSession, dashboard: DashboardService, profiles: dict):
        repo = TreeRepositoryImpl(db_session)
        base = datetime(2024, 5, 1)
        alice_id = profiles["alice"].id
        await repo.create(make_tree(alice_id, 20, base, "First"))
        await repo.create(make_tree(alice_id, 30, base + timedelta(hours=1), "Second"))
        await repo.create(make_tree(profiles["bob"].id, 39, base, "Bob's"))

        trees = await dashboard.list_trees(Identity(user_id=alice_id, session_id="s"))

        assert [t.tree_name for t in trees] == ["Second", "First"]

    async def test_summary(self, db_session: AsyncSession, dashboard: DashboardService, profiles: dict):
        repo = TreeRepositoryImpl(db_session)
        base = datetime(2024, 5, 1)
        bob = profiles["bob"]
        for i, growth in enumerate((20, 25, 36)):
            await repo.create(make_tree(bob.id, growth, base + timedelta(hours=i)))

        summary = await dashboard.summary(Identity(user_id=bob.id, session_id="s"), bob)

        assert summary.total_trees == 3
        assert summary.average_growth == 27
        assert summary.rank.rank == 1
        assert [p.full_name for p in summary.leaderboard] == ["Bob", "Alice", "Carol"]

    async def test_trees_failure(self, db_session: AsyncSession, profiles: dict):
        service = DashboardService(
            FailingRepo(TreeRepositoryImpl(db_session), "list_by_user"),
            ProfileRepositoryImpl(db_session),
        )
        with pytest.raises(RemoteCallError) as exc:
            await service.list_trees(Identity(user_id=profiles["alice"].id, session_id="s"))
        assert exc.value.message == "Failed to load trees"

    def test_average_growth(self):
        base = datetime(2024, 1, 1)
        assert average_growth([]) == 0
        assert average_growth([make_tree("u", 20, base), make_tree("u", 23, base)]) == 22
        assert average_growth([make_tree("u", 15, base)]) == 15
        assert average_growth([make_tree("u", 20, base), make_tree("u", 21, base)]) == 21
        assert average_growth([make_tree("u", 22, base), make_tree("u", 23, base)]) == 23
