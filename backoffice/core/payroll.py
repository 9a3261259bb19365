# -*- coding: utf-8 -*-
"""Monthly payroll runs: gross commission netted against salary deductions.

One run per (year, month). A run and its lines are written, replaced or left
alone as a whole; the read-aggregate-write sequence shares one transaction.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError

from ..errors import PayrollRunExists, PayrollRunNotFound
from ..money import D, ZERO, round2
from ..periods import DateRange, month_range
from .aggregate import AggregateResult, aggregate
from .commission import CommissionResolver

logger = logging.getLogger(__name__)

CREATED = "created"
REPLACED = "replaced"


@dataclass(frozen=True)
class PayrollOutcome:
    run: Any
    status: str  # created|replaced


def net_amounts(gross: Decimal, deductions: Decimal) -> tuple[Decimal, Decimal]:
    """``(carry_forward, net_pay)``; at most one of them is non-zero."""
    return max(ZERO, deductions - gross), max(ZERO, gross - deductions)


class PayrollRunBuilder:
    def __init__(self, store, employee_type: str = "FIELD", isolation_level: Optional[str] = None):
        self.store = store
        self.employee_type = employee_type
        self.isolation_level = isolation_level

    # ------------ computation -------------------------------------------------
    def commission_by_employee(self, period: DateRange) -> AggregateResult:
        dispatches = self.store.find_dispatches(period)
        return aggregate(dispatches, period, CommissionResolver(self.store))

    def deductions_by_employee(self, period: DateRange) -> dict[int, Decimal]:
        sums: dict[int, Decimal] = defaultdict(lambda: ZERO)
        for row in self.store.find_deductions(period):
            sums[row.employee_id] += D(row.amount)
        return dict(sums)

    def compute_lines(self, period: DateRange) -> list[dict]:
        agg = self.commission_by_employee(period)
        deductions = self.deductions_by_employee(period)

        ids = set(agg.summaries) | set(deductions)
        employees = self.store.find_employees(ids, type=self.employee_type) if ids else []
        valid = {e.id for e in employees}
        skipped = ids - valid
        if skipped:
            logger.info("payroll: skipping unknown or non-%s employees %s", self.employee_type, sorted(skipped))

        lines = []
        for eid in sorted(valid):
            summary = agg.summaries.get(eid)
            gross = summary.commission if summary else ZERO
            applied = round2(deductions.get(eid, ZERO))
            carry, net = net_amounts(gross, applied)

            notes = []
            if carry > 0:
                notes.append("carry-forward")
            if summary is not None and summary.degraded_reason:
                notes.append("commission-degraded")
            lines.append(
                {
                    "employee_id": eid,
                    "gross": gross,
                    "deductions_applied": applied,
                    "carry_forward": carry,
                    "net_pay": net,
                    "note": ",".join(notes) or None,
                }
            )
        return lines

    def preview(self, year, month) -> list[dict]:
        """Lines the run would contain; nothing is written."""
        return self.compute_lines(month_range(year, month))

    # ------------ run ---------------------------------------------------------
    def run(self, year, month, overwrite: bool = False) -> PayrollOutcome:
        period = month_range(year, month)
        y, m = period.start.year, period.start.month
        status = CREATED
        try:
            with self.store.transaction(isolation_level=self.isolation_level):
                existing = self.store.find_run(y, m)
                if existing is not None:
                    if not overwrite:
                        raise PayrollRunExists(
                            f"payroll run for {y}-{m:02d} already exists", run=existing, year=y, month=m
                        )
                    status = REPLACED
                lines = self.compute_lines(period)
                if existing is not None:
                    self.store.delete_run(existing)
                run = self.store.create_run(y, m, lines)
        except IntegrityError as exc:
            # another request created the period first
            winner = self.store.find_run(y, m)
            if winner is None:
                raise
            logger.warning("payroll: lost race for %s-%02d, run %s exists", y, m, winner.id)
            raise PayrollRunExists(
                f"payroll run for {y}-{m:02d} already exists", run=winner, year=y, month=m
            ) from exc

        logger.info(
            "payroll run %s for %s-%02d: %d lines",
            status,
            y,
            m,
            len(lines),
            extra={"payroll_run_id": run.id, "overwrite": overwrite},
        )
        return PayrollOutcome(run=run, status=status)


def get_payroll_run(store, year, month) -> Any:
    period = month_range(year, month)
    run = store.find_run(period.start.year, period.start.month)
    if run is None:
        raise PayrollRunNotFound("payroll run not found", year=period.start.year, month=period.start.month)
    return run


def run_payroll(store, year, month, overwrite: bool = False, isolation_level: Optional[str] = None) -> PayrollOutcome:
    return PayrollRunBuilder(store, isolation_level=isolation_level).run(year, month, overwrite=overwrite)
