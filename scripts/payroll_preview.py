# -*- coding: utf-8 -*-
"""
Print what the payroll run for a month would contain. Nothing is written.

Usage:
  python scripts/payroll_preview.py 2025-11
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backoffice import create_app  # noqa: E402
from backoffice.core.payroll import PayrollRunBuilder  # noqa: E402
from backoffice.errors import BackofficeError  # noqa: E402
from backoffice.money import money_str  # noqa: E402
from backoffice.periods import month_range, parse_ym  # noqa: E402
from backoffice.repository import SqlStore  # noqa: E402


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("period", help="YYYY-MM")
    args = parser.parse_args(argv)

    app = create_app()
    with app.app_context():
        try:
            year, month = parse_ym(args.period)
        except BackofficeError as err:
            print(f"[preview] {err.message}", file=sys.stderr)
            return 2

        builder = PayrollRunBuilder(SqlStore())
        agg = builder.commission_by_employee(month_range(year, month))
        lines = builder.preview(year, month)

        print(f"[preview] {year}-{month:02d}: {len(lines)} line(s)")
        print(f"{'employee':>8}  {'gross':>10}  {'deduct':>10}  {'carry':>10}  {'net':>10}  note")
        for line in lines:
            print(
                f"{line['employee_id']:>8}  {money_str(line['gross']):>10}  "
                f"{money_str(line['deductions_applied']):>10}  {money_str(line['carry_forward']):>10}  "
                f"{money_str(line['net_pay']):>10}  {line['note'] or ''}"
            )
        for eid, reason in sorted(agg.degraded.items()):
            print(f"[preview] employee {eid}: commission degraded ({reason})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
