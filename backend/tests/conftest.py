"""Pytest configuration and shared fixtures."""
import random
import sys
from datetime import datetime, timedelta
from pathlib import Path

backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from ecogrow.domain.common.types import generate_id, utcnow
from ecogrow.domain.market.models import MarketplaceItem
from ecogrow.domain.profile.models import Profile, Role
from ecogrow.infra.db import models  # noqa: F401
from ecogrow.infra.db.base import Base, make_session_factory
from ecogrow.infra.db.repositories import (
    MarketplaceItemRepositoryImpl,
    ProfileRepositoryImpl,
    RoleRepositoryImpl,
)

pytest_plugins = ("pytest_asyncio",)

SCAN_SEED = 1234


def pytest_configure(config):
    """Register markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that need a real DB (deselect with '-m \"not integration\"')"
    )


@pytest.fixture
async def db_session():
    """In-memory SQLite session with the full schema."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = make_session_factory(engine)
    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


def make_profile(full_name: str = "Test User", eco_coins: int = 0, created_at: datetime | None = None, **kwargs) -> Profile:
    now = created_at or utcnow()
    return Profile(
        id=kwargs.pop("id", None) or generate_id(),
        full_name=full_name,
        eco_coins=eco_coins,
        created_at=now,
        updated_at=now,
        **kwargs,
    )


def make_item(name: str = "Bamboo Toothbrush", price: int = 40, stock: int = 5, created_at: datetime | None = None) -> MarketplaceItem:
    now = created_at or utcnow()
    return MarketplaceItem(
        id=generate_id(),
        name=name,
        description=f"{name} for testing",
        price_eco_coin=price,
        stock=stock,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
async def profiles(db_session: AsyncSession):
    """Three profiles with distinct balances and sign-up times."""
    repo = ProfileRepositoryImpl(db_session)
    base = datetime(2024, 1, 1)
    alice = await repo.create(make_profile("Alice", 100, base))
    bob = await repo.create(make_profile("Bob", 250, base + timedelta(days=1)))
    carol = await repo.create(make_profile("Carol", 100, base + timedelta(days=2)))
    return {"alice": alice, "bob": bob, "carol": carol}


@pytest.fixture
async def items(db_session: AsyncSession):
    """Two catalog items."""
    repo = MarketplaceItemRepositoryImpl(db_session)
    base = datetime(2024, 1, 1)
    bottle = await repo.create(make_item("Reusable Bottle", price=120, stock=3, created_at=base))
    seeds = await repo.create(make_item("Seed Kit", price=80, stock=0, created_at=base + timedelta(days=1)))
    return {"bottle": bottle, "seeds": seeds}


@pytest.fixture
async def client(db_session: AsyncSession):
    """HTTP client over the app, bound to the test session."""
    from ecogrow.api.deps import get_scan_rng
    from ecogrow.infra.db.session import get_db
    from ecogrow.main import app

    async def override_get_db():
        yield db_session

    rng = random.Random(SCAN_SEED)
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_scan_rng] = lambda: rng

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def sign_up(client: AsyncClient, email: str, full_name: str = "Test User", password: str = "secret123") -> dict:
    """Register through the API; returns the token response plus an auth header."""
    response = await client.post(
        "/v1/auth/signup",
        json={"email": email, "password": password, "full_name": full_name},
    )
    assert response.status_code == 201, response.text
    data = response.json()
    data["headers"] = {"Authorization": f"Bearer {data['access_token']}"}
    return data


@pytest.fixture
async def member(client: AsyncClient):
    """A signed-up regular user."""
    return await sign_up(client, "member@example.com", "Mia Member")


@pytest.fixture
async def admin(client: AsyncClient, db_session: AsyncSession):
    """A signed-up user holding the admin role."""
    data = await sign_up(client, "admin@example.com", "Ada Admin")
    await RoleRepositoryImpl(db_session).grant(data["user_id"], Role.ADMIN)
    return data
