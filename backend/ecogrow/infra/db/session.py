"""Request-scoped database sessions."""
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from ecogrow.infra.db import base


async def get_db() -> AsyncIterator[AsyncSession]:
    """Yield one session per request."""
    if base.AsyncSessionLocal is None:
        raise RuntimeError("Database is not configured (AsyncSessionLocal is None)")
    async with base.AsyncSessionLocal() as session:
        yield session
