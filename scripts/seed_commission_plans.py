# -*- coding: utf-8 -*-
"""
Seed the default INSIDE and FIELD commission plans from the built-in tables.

Existing plans with the same name keep their brackets; the seeded plan is
made the default of its role either way.

Usage:
  python scripts/seed_commission_plans.py
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backoffice import create_app  # noqa: E402
from backoffice.core.brackets import STATIC_BRACKETS  # noqa: E402
from backoffice.extensions import db  # noqa: E402
from backoffice.models import CommissionPlan  # noqa: E402
from backoffice.repository import SqlStore  # noqa: E402

PLAN_NAMES = {"INSIDE": "Inside waiters (default)", "FIELD": "Field waiters (default)"}


def seed(store: SqlStore) -> list[CommissionPlan]:
    plans = []
    with store.transaction():
        for role, name in PLAN_NAMES.items():
            plan = CommissionPlan.query.filter_by(name=name).first()
            if plan is None:
                plan = CommissionPlan(
                    name=name,
                    role=role,
                    brackets_json=[b.to_dict() for b in STATIC_BRACKETS[role]],
                )
                db.session.add(plan)
                db.session.flush()
                print(f"[seed] created plan {plan.id}: {name} ({len(STATIC_BRACKETS[role])} brackets)")
            else:
                print(f"[seed] plan exists: {plan.id} {name}")
            plans.append(store.set_default_plan(plan.id))
    return plans


def main() -> int:
    app = create_app()
    with app.app_context():
        seed(SqlStore())
        print("[seed] done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
