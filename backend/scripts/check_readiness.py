#!/usr/bin/env python3
"""Print each readiness check and exit 0 when the required ones (config, packages, database) pass."""
import sys
from pathlib import Path

# Make the ecogrow package importable when run from a checkout
_backend = Path(__file__).resolve().parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

from ecogrow.readiness import REQUIRED_CHECKS, is_ready, run_all_checks


def main() -> int:
    checks = run_all_checks()
    ready, summary = is_ready(checks)
    width = max(len(name) for name in summary)
    for name, msg in summary.items():
        passed = checks[name][0]
        marker = "OK  " if passed else "FAIL"
        required = " (required)" if name in REQUIRED_CHECKS else ""
        print(f"  {name.ljust(width)}  {marker}  {msg}{required}")
    print("")
    print("EcoGrow API is READY" if ready else "EcoGrow API is NOT READY")
    return 0 if ready else 1


if __name__ == "__main__":
    sys.exit(main())
