# -*- coding: utf-8 -*-
"""Per-employee commission and cash totals over a set of field dispatches."""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, Optional

from ..money import D, ZERO, round2
from ..periods import DateRange
from .commission import CommissionResolver
from .reconcile import reconcile


@dataclass
class _Running:
    employee_id: int
    employee_name: str
    sold_amount: Decimal = ZERO
    commission: Decimal = ZERO
    cash_remit: Decimal = ZERO
    gross_sales: Decimal = ZERO
    dispatches: int = 0
    days: set = field(default_factory=set)


@dataclass(frozen=True)
class EmployeeSummary:
    employee_id: int
    employee_name: str
    sold_amount: Decimal
    commission: Decimal
    cash_remit: Decimal
    gross_sales: Decimal
    active_days: int
    dispatches: int
    degraded_reason: Optional[str] = None


@dataclass(frozen=True)
class AggregateResult:
    date_range: DateRange
    summaries: dict[int, EmployeeSummary]

    @property
    def degraded(self) -> dict[int, str]:
        return {eid: s.degraded_reason for eid, s in self.summaries.items() if s.degraded_reason}

    def totals(self) -> dict[str, Decimal]:
        # sums of already rounded per-employee figures
        out = {"sold_amount": ZERO, "commission": ZERO, "cash_remit": ZERO, "gross_sales": ZERO}
        for s in self.summaries.values():
            out["sold_amount"] += s.sold_amount
            out["commission"] += s.commission
            out["cash_remit"] += s.cash_remit
            out["gross_sales"] += s.gross_sales
        return out


def aggregate(dispatches: Iterable[Any], date_range: DateRange, resolver: CommissionResolver) -> AggregateResult:
    """Sum settled dispatches per employee.

    Commission is looked up per dispatch on its sold amount, never on the
    employee's total. Pending dispatches and dispatches outside the range
    are skipped.
    """
    running: dict[int, _Running] = {}
    degraded: dict[int, str] = {}

    for d in sorted(dispatches, key=lambda x: (x.date, x.id)):
        ret = d.ret
        if ret is None or d.date not in date_range:
            continue

        rec = reconcile(d, ret)
        res = resolver.resolve_safe(d.waiter_id, rec.sold_amount, "FIELD")
        if not res.ok:
            degraded.setdefault(d.waiter_id, res.degraded_reason)

        waiter = getattr(d, "waiter", None)
        acc = running.get(d.waiter_id)
        if acc is None:
            acc = running[d.waiter_id] = _Running(
                employee_id=d.waiter_id,
                employee_name=getattr(waiter, "name", None) or f"#{d.waiter_id}",
            )
        acc.sold_amount += rec.sold_amount
        acc.commission += res.amount
        acc.cash_remit += D(ret.cash_collected)
        acc.gross_sales += rec.gross_sales
        acc.dispatches += 1
        acc.days.add(d.date)

    summaries = {
        eid: EmployeeSummary(
            employee_id=eid,
            employee_name=acc.employee_name,
            sold_amount=round2(acc.sold_amount),
            commission=round2(acc.commission),
            cash_remit=round2(acc.cash_remit),
            gross_sales=round2(acc.gross_sales),
            active_days=len(acc.days),
            dispatches=acc.dispatches,
            degraded_reason=degraded.get(eid),
        )
        for eid, acc in running.items()
    }
    return AggregateResult(date_range=date_range, summaries=summaries)
