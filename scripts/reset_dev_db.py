"""
Dev-only reset script for Job Tracker.

What it does:
- Deletes every row in job_applications.
- Optionally inserts --seed N random sample applications.

Guardrails:
- Requires ENV=dev
- Requires confirmation prompt unless --yes is passed
"""

from __future__ import annotations

import argparse
from pathlib import Path
import sys


# Allow `import jobtracker.*` when run from a checkout without `pip install -e .`
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))


from jobtracker.core.config import settings  # noqa: E402
from jobtracker.core.database import SessionLocal, create_tables  # noqa: E402
from jobtracker.services.dev_data import clear_job_applications, seed_job_applications  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Dev reset: clear job applications, optionally seed samples.")
    parser.add_argument("--yes", action="store_true", help="Skip confirmation prompt.")
    parser.add_argument("--seed", type=int, default=0, metavar="N", help="Insert N sample applications afterwards.")
    args = parser.parse_args()

    if (settings.ENV or "").strip().lower() != "dev":
        print(f"Refusing to run: ENV must be 'dev' (got {settings.ENV!r})")
        return 2

    if not args.yes:
        resp = input("WARNING: This will DELETE all job applications.\n\nType RESET to continue: ").strip()
        if resp != "RESET":
            print("Cancelled.")
            return 1

    create_tables()
    with SessionLocal() as db:
        deleted = clear_job_applications(db)
        seeded = seed_job_applications(db, args.seed) if args.seed > 0 else []

    print(f"Done. deleted={deleted} seeded={len(seeded)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
