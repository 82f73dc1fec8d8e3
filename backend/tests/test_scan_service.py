"""Tests for the scan flow."""
import random

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession

from ecogrow.domain.common.errors import AuthenticationError, RemoteCallError, ValidationError
from ecogrow.domain.identity.models import Identity
from ecogrow.domain.scan.models import SoilCondition
from ecogrow.domain.scan.scoring import fixed_scoring
from ecogrow.domain.scan.services import SCAN_COMPLETE_MESSAGE, ScanService
from ecogrow.infra.db.repositories import ProfileRepositoryImpl, TreeRepositoryImpl

from fakes import FailingRepo

IMAGE = b"\x89PNG fake image bytes"


def identity_for(profile) -> Identity:
    return Identity(user_id=profile.id, session_id="session-1")


def best_case_service(tree_repo, profile_repo) -> ScanService:
    return ScanService(
        tree_repo,
        profile_repo,
        rng=random.Random(0),
        scoring=fixed_scoring(35, 70, SoilCondition.EXCELLENT),
    )


class TestScanTree:
    """Successful scans persist a tree and credit the reward."""

    async def test_scan_persists_tree_and_credits_reward(self, db_session: AsyncSession, profiles: dict):
        alice = profiles["alice"]
        profile_repo = ProfileRepositoryImpl(db_session)
        tree_repo = TreeRepositoryImpl(db_session)
        service = best_case_service(tree_repo, profile_repo)

        result = await service.scan_tree(identity_for(alice), "  Old Oak  ", IMAGE)

        assert result.reward == 27
        assert result.message == SCAN_COMPLETE_MESSAGE
        assert [b.amount for b in result.bonuses] == [5, 5, 7]
        assert result.tree.tree_name == "Old Oak"
        assert result.tree.total_scans == 1
        assert result.tree.soil_condition == SoilCondition.EXCELLENT

        trees = await tree_repo.list_by_user(alice.id)
        assert len(trees) == 1
        assert trees[0].growth_level == 35
        assert trees[0].humidity == 70
        assert (await profile_repo.get_by_id(alice.id)).eco_coins == 127

    async def test_random_scoring_reward_matches_balance_change(self, db_session: AsyncSession, profiles: dict):
        bob = profiles["bob"]
        profile_repo = ProfileRepositoryImpl(db_session)
        service = ScanService(TreeRepositoryImpl(db_session), profile_repo, rng=random.Random(42))

        result = await service.scan_tree(identity_for(bob), "Maple", IMAGE)

        assert 10 <= result.reward <= 27
        assert (await profile_repo.get_by_id(bob.id)).eco_coins == 250 + result.reward

    async def test_each_scan_creates_a_new_tree(self, db_session: AsyncSession, profiles: dict):
        alice = profiles["alice"]
        tree_repo = TreeRepositoryImpl(db_session)
        service = best_case_service(tree_repo, ProfileRepositoryImpl(db_session))

        await service.scan_tree(identity_for(alice), "Oak", IMAGE)
        await service.scan_tree(identity_for(alice), "Oak", IMAGE)

        assert len(await tree_repo.list_by_user(alice.id)) == 2


class TestScanValidation:
    """Rejected scans make no remote calls."""

    async def test_missing_image(self, db_session: AsyncSession, profiles: dict):
        tree_repo = FailingRepo(TreeRepositoryImpl(db_session))
        service = best_case_service(tree_repo, ProfileRepositoryImpl(db_session))

        with pytest.raises(ValidationError) as exc:
            await service.scan_tree(identity_for(profiles["alice"]), "Oak", None)

        assert exc.value.message == "Please upload an image first!"
        assert tree_repo.calls == []

    async def test_blank_name(self, db_session: AsyncSession, profiles: dict):
        tree_repo = FailingRepo(TreeRepositoryImpl(db_session))
        service = best_case_service(tree_repo, ProfileRepositoryImpl(db_session))

        with pytest.raises(ValidationError) as exc:
            await service.scan_tree(identity_for(profiles["alice"]), "   ", IMAGE)

        assert exc.value.message == "Please enter a tree name!"
        assert tree_repo.calls == []

    async def test_image_checked_before_name(self, db_session: AsyncSession, profiles: dict):
        service = best_case_service(TreeRepositoryImpl(db_session), ProfileRepositoryImpl(db_session))

        with pytest.raises(ValidationError) as exc:
            await service.scan_tree(identity_for(profiles["alice"]), "", b"")

        assert exc.value.message == "Please upload an image first!"

    async def test_anonymous_caller(self, db_session: AsyncSession):
        tree_repo = FailingRepo(TreeRepositoryImpl(db_session))
        service = best_case_service(tree_repo, ProfileRepositoryImpl(db_session))

        with pytest.raises(AuthenticationError):
            await service.scan_tree(None, "Oak", IMAGE)
        assert tree_repo.calls == []


class TestScanFailures:
    """Writes are independent: nothing is rolled back."""

    async def test_tree_insert_failure_skips_credit(self, db_session: AsyncSession, profiles: dict):
        alice = profiles["alice"]
        real_profiles = ProfileRepositoryImpl(db_session)
        profile_repo = FailingRepo(real_profiles)
        service = best_case_service(
            FailingRepo(TreeRepositoryImpl(db_session), "create", message="insert denied"),
            profile_repo,
        )

        with pytest.raises(RemoteCallError) as exc:
            await service.scan_tree(identity_for(alice), "Oak", IMAGE)

        assert exc.value.message == "insert denied"
        assert profile_repo.calls == []
        assert (await real_profiles.get_by_id(alice.id)).eco_coins == 100

    async def test_increment_failure_falls_back_to_read_then_write(self, db_session: AsyncSession, profiles: dict):
        alice = profiles["alice"]
        real_profiles = ProfileRepositoryImpl(db_session)
        profile_repo = FailingRepo(real_profiles, "increment_eco_coins")
        service = best_case_service(TreeRepositoryImpl(db_session), profile_repo)

        result = await service.scan_tree(identity_for(alice), "Oak", IMAGE)

        assert result.reward == 27
        assert profile_repo.calls == ["increment_eco_coins", "get_by_id", "set_eco_coins"]
        assert (await real_profiles.get_by_id(alice.id)).eco_coins == 127

    async def test_failed_increment_statement_rolls_back_before_fallback(self, db_session: AsyncSession, profiles: dict):
        alice = profiles["alice"]
        engine = db_session.bind.sync_engine
        rollbacks = []

        def reject_increment(conn, cursor, statement, parameters, context, executemany):
            if "eco_coins + " in statement:
                raise RuntimeError("increment rejected")

        event.listen(engine, "before_cursor_execute", reject_increment)
        event.listen(db_session.sync_session, "after_rollback", lambda session: rollbacks.append(session))
        try:
            service = best_case_service(TreeRepositoryImpl(db_session), ProfileRepositoryImpl(db_session))
            result = await service.scan_tree(identity_for(alice), "Oak", IMAGE)
        finally:
            event.remove(engine, "before_cursor_execute", reject_increment)

        assert result.reward == 27
        assert rollbacks
        assert (await ProfileRepositoryImpl(db_session).get_by_id(alice.id)).eco_coins == 127

    async def test_credit_failure_keeps_tree_without_coins(self, db_session: AsyncSession, profiles: dict):
        alice = profiles["alice"]
        real_profiles = ProfileRepositoryImpl(db_session)
        tree_repo = TreeRepositoryImpl(db_session)
        service = best_case_service(
            tree_repo,
            FailingRepo(real_profiles, "increment_eco_coins", "set_eco_coins"),
        )

        result = await service.scan_tree(identity_for(alice), "Oak", IMAGE)

        assert result.message == SCAN_COMPLETE_MESSAGE
        assert len(await tree_repo.list_by_user(alice.id)) == 1
        assert (await real_profiles.get_by_id(alice.id)).eco_coins == 100
