"""Readiness test: config and packages must pass; the database may be unavailable (e.g. in CI/sandbox)."""
import pytest

from ecogrow.readiness import REQUIRED_CHECKS, check_config, check_packages, is_ready, run_all_checks


def test_config_and_packages_pass():
    assert check_config() == (True, "ok")
    ok, msg = check_packages()
    assert ok, msg


def test_is_ready_requires_every_required_check():
    checks = {name: (True, "ok") for name in REQUIRED_CHECKS}
    assert is_ready(checks) == (True, {name: "ok" for name in REQUIRED_CHECKS})

    checks["database"] = (False, "connection refused")
    ready, summary = is_ready(checks)
    assert ready is False
    assert summary["database"] == "connection refused"


@pytest.mark.integration
def test_readiness_all_checks():
    """Config and packages must be ok; the database may be unreachable."""
    checks = run_all_checks()
    for name in ("config", "packages"):
        ok, msg = checks.get(name, (False, "missing"))
        assert ok, f"readiness {name}: {msg}"
    ready, summary = is_ready(checks)
    if not ready:
        assert not checks["database"][0], summary
