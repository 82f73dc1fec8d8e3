"""Database engine, session factory and declarative base."""
import os
import ssl
import sys
from urllib.parse import parse_qs, urlencode, urlparse, urlunparse

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

_SYNC_PG_SCHEMES = ("postgresql://", "postgres://")


def resolve_database_url(url: str) -> tuple[str, dict]:
    """Turn a hosted Postgres URL into (asyncpg URL, connect_args).

    Hosted databases hand out ``postgres://...?sslmode=require``; asyncpg wants
    the ``postgresql+asyncpg`` scheme and an ``ssl`` argument instead of
    ``sslmode``. Non-Postgres URLs (e.g. sqlite+aiosqlite) pass through.
    """
    url = (url or "").strip()
    for scheme in _SYNC_PG_SCHEMES:
        if url.startswith(scheme):
            url = "postgresql+asyncpg://" + url[len(scheme):]
            break

    parsed = urlparse(url)
    query = parse_qs(parsed.query, keep_blank_values=True)
    sslmode = query.pop("sslmode", None)
    url = urlunparse(parsed._replace(query=urlencode(query, doseq=True)))

    if sslmode != ["require"]:
        return url, {}
    # DATABASE_SSL_VERIFY=true turns on certificate verification
    if os.environ.get("DATABASE_SSL_VERIFY", "false").strip().lower() in ("true", "1"):
        return url, {"ssl": True}
    ctx = ssl.create_default_context()
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE
    return url, {"ssl": ctx}


def build_engine(database_url: str, **kwargs) -> AsyncEngine:
    """Async engine for a database URL as configured in settings."""
    url, connect_args = resolve_database_url(database_url)
    return create_async_engine(url, connect_args=connect_args, **kwargs)


def make_session_factory(engine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# Check if we're running in pytest (during collection or execution)
_is_pytest = "pytest" in sys.modules or "PYTEST_CURRENT_TEST" in os.environ

if not _is_pytest:
    from ecogrow.settings import settings

    engine = build_engine(settings.database_url, echo=settings.database_echo, pool_pre_ping=True)
    AsyncSessionLocal = make_session_factory(engine)
else:
    # Tests build their own engine and override get_db
    engine = None
    AsyncSessionLocal = None


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


# Models are imported in ecogrow/infra/db/models/__init__.py; do not import them here (circular import).
