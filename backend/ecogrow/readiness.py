"""Readiness checks: config, packages, database."""
import asyncio
import importlib
import logging

from sqlalchemy import text

logger = logging.getLogger(__name__)

# (passed, message)
CheckResult = tuple[bool, str]
ChecksDict = dict[str, CheckResult]

REQUIRED_CHECKS = {"config", "packages", "database"}

# import name -> distribution name shown when missing
CRITICAL_MODULES = {
    "uvicorn": "uvicorn",
    "sqlalchemy": "sqlalchemy",
    "jwt": "PyJWT",
    "bcrypt": "bcrypt",
    "ecogrow.main": "ecogrow.main",
}


def check_config() -> CheckResult:
    """Settings must build, and tokens cannot be signed without a secret."""
    try:
        from ecogrow.settings import get_settings
        current = get_settings()
    except Exception as e:
        return False, str(e)
    if not current.database_url:
        return False, "database_url is empty"
    if not current.jwt_secret:
        return False, "jwt_secret is empty"
    return True, "ok"


def check_packages() -> CheckResult:
    missing = []
    for module, label in CRITICAL_MODULES.items():
        try:
            importlib.import_module(module)
        except ImportError as e:
            missing.append(label if module != "ecogrow.main" else f"{label} ({e})")
    if missing:
        return False, f"missing: {', '.join(missing)}"
    return True, "ok"


async def _check_database_async(database_url: str) -> CheckResult:
    """Run a trivial query against the database."""
    from ecogrow.infra.db.base import build_engine
    try:
        engine = build_engine(database_url, pool_pre_ping=True)
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        await engine.dispose()
        return True, "ok"
    except Exception as e:
        logger.warning("Database readiness check failed: %s", e)
        return False, str(e)


def check_database() -> CheckResult:
    """Check database connectivity using settings.database_url."""
    try:
        from ecogrow.settings import get_settings
        return asyncio.run(_check_database_async(get_settings().database_url))
    except Exception as e:
        return False, str(e)


def run_all_checks() -> ChecksDict:
    """Run all readiness checks (sync). Returns dict of check_name -> (passed, message)."""
    return {
        "config": check_config(),
        "packages": check_packages(),
        "database": check_database(),
    }


async def run_all_checks_async() -> ChecksDict:
    """Run all readiness checks from a running event loop (e.g. GET /ready)."""
    from ecogrow.settings import get_settings
    return {
        "config": check_config(),
        "packages": check_packages(),
        "database": await _check_database_async(get_settings().database_url),
    }


def is_ready(checks: ChecksDict | None = None) -> tuple[bool, dict[str, str]]:
    """
    True if all required checks pass.
    Returns (ready: bool, checks_summary: dict of name -> "ok" | error message).
    """
    if checks is None:
        checks = run_all_checks()
    summary = {name: msg for name, (passed, msg) in checks.items()}
    all_required = all(checks[n][0] for n in REQUIRED_CHECKS if n in checks)
    return all_required, summary
