"""Seed the marketplace catalog and, optionally, grant the admin role.

Usage:
    python scripts/seed_marketplace.py [admin-email]
"""
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select

from ecogrow.domain.common.types import utcnow
from ecogrow.domain.profile.models import Role
from ecogrow.infra.db.base import Base, build_engine, make_session_factory
from ecogrow.infra.db.models import CredentialModel, MarketplaceItemModel, UserRoleModel
from ecogrow.settings import settings


# Idempotent: fixed id per item.
ITEMS = [
    {
        "id": "item-bamboo-toothbrush",
        "name": "Bamboo Toothbrush Set",
        "description": "Four biodegradable bamboo toothbrushes with charcoal bristles.",
        "price_eco_coin": 40,
        "stock": 50,
    },
    {
        "id": "item-reusable-bottle",
        "name": "Reusable Water Bottle",
        "description": "Insulated stainless steel bottle, 750 ml.",
        "price_eco_coin": 120,
        "stock": 25,
    },
    {
        "id": "item-seed-kit",
        "name": "Native Tree Seed Kit",
        "description": "Seeds, soil pellets and a guide for planting three native trees.",
        "price_eco_coin": 80,
        "stock": 30,
    },
    {
        "id": "item-tote-bag",
        "name": "Organic Cotton Tote",
        "description": "Sturdy shopping bag made from organic cotton.",
        "price_eco_coin": 60,
        "stock": 40,
    },
]


async def seed(admin_email: str | None = None) -> None:
    """Create tables if needed, insert missing items and grant the admin role."""
    engine = build_engine(settings.database_url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    AsyncSessionLocal = make_session_factory(engine)
    async with AsyncSessionLocal() as session:
        added = 0
        now = utcnow()
        for item in ITEMS:
            if await session.get(MarketplaceItemModel, item["id"]) is not None:
                continue
            session.add(MarketplaceItemModel(created_at=now, updated_at=now, **item))
            added += 1
        await session.commit()
        print(f"Seeded {added} marketplace items ({len(ITEMS) - added} already existed).")

        if admin_email:
            result = await session.execute(
                select(CredentialModel).where(CredentialModel.email == admin_email.strip().lower())
            )
            credential = result.scalar_one_or_none()
            if credential is None:
                print(f"No user with email {admin_email}; sign up first.")
            else:
                existing = await session.execute(
                    select(UserRoleModel).where(
                        UserRoleModel.user_id == credential.user_id,
                        UserRoleModel.role == Role.ADMIN.value,
                    )
                )
                if existing.scalar_one_or_none() is None:
                    session.add(
                        UserRoleModel(
                            id=f"role-{credential.user_id}-admin",
                            user_id=credential.user_id,
                            role=Role.ADMIN.value,
                            created_at=now,
                        )
                    )
                    await session.commit()
                    print(f"Granted admin role to {admin_email}.")
                else:
                    print(f"{admin_email} is already an admin.")
    await engine.dispose()


if __name__ == "__main__":
    admin_email = sys.argv[1] if len(sys.argv) > 1 else None
    asyncio.run(seed(admin_email))
