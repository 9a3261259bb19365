"""
Bring the database schema up to date without dropping data.

Creates tables declared in the models that do not exist yet; existing
tables and rows are left alone. For real schema changes use
``flask db upgrade``.

Usage:
  python scripts/ensure_schema.py
"""

from __future__ import annotations

import sys
from pathlib import Path

from sqlalchemy import inspect

# project root on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backoffice import create_app  # noqa: E402
from backoffice.extensions import db  # noqa: E402


def _tables() -> set[str]:
    return set(inspect(db.engine).get_table_names())


def main() -> int:
    print("[ensure] loading app...")
    app = create_app()
    with app.app_context():
        uri = app.config.get("SQLALCHEMY_DATABASE_URI", "")
        print(f"[ensure] SQLALCHEMY_DATABASE_URI = {uri}")

        before = _tables()
        print(f"[ensure] tables before: {len(before)}")

        db.create_all()

        after = _tables()
        created = sorted(after - before)
        if created:
            print(f"[ensure] created: {', '.join(created)}")
        else:
            print("[ensure] nothing to create.")

        expected = ["employee", "commission_plan", "field_dispatch", "field_return", "payroll_run", "payroll_line"]
        missing = [t for t in expected if t not in after]
        if missing:
            print(f"[ensure] still missing: {', '.join(missing)}")
            return 1
        print("[ensure] done.")
        return 0


if __name__ == "__main__":
    sys.exit(main())
