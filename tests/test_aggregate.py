# -*- coding: utf-8 -*-
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from sqlalchemy.exc import OperationalError

from backoffice.core.aggregate import aggregate
from backoffice.core.commission import CommissionResolver
from backoffice.periods import day_range, month_range

NOV = month_range(2025, 11)


class FakeStore:
    """No stored plans: every lookup ends at the static table."""

    def __init__(self, plans=None, fail=False):
        self.plans = plans or {}
        self.fail = fail
        self.lookups = 0

    def find_plan(self, employee_id=None, role=None):
        self.lookups += 1
        if self.fail:
            raise OperationalError("SELECT plan", {}, Exception("database is locked"))
        return self.plans.get(employee_id if employee_id is not None else role)


_ids = iter(range(1, 1000))


def _d(waiter_id, qty, price="50", returned="0", cash="0", day=date(2025, 11, 3), settled=True, name="Amina"):
    ret = None
    if settled:
        ret = SimpleNamespace(qty_returned=Decimal(returned), loss_qty=Decimal("0"), cash_collected=Decimal(cash))
    return SimpleNamespace(
        id=next(_ids),
        waiter_id=waiter_id,
        waiter=SimpleNamespace(name=name),
        date=day,
        qty_dispatched=Decimal(qty),
        price_each=Decimal(price),
        ret=ret,
    )


def test_commission_is_per_dispatch_not_per_total():
    # two dispatches of 400 each: 100 + 100, not the 300 an 800 total would pay
    ds = [_d(1, "10", returned="2", cash="400"), _d(1, "10", returned="2", cash="400")]
    res = aggregate(ds, NOV, CommissionResolver(FakeStore()))
    s = res.summaries[1]
    assert s.sold_amount == Decimal("800.00")
    assert s.commission == Decimal("200.00")
    assert s.cash_remit == Decimal("800.00")
    assert s.gross_sales == Decimal("1000.00")
    assert s.dispatches == 2
    assert s.active_days == 1


def test_pending_and_out_of_range_dispatches_are_skipped():
    ds = [
        _d(1, "10", cash="500"),
        _d(1, "10", settled=False),
        _d(1, "10", cash="500", day=date(2025, 12, 1)),
    ]
    res = aggregate(ds, NOV, CommissionResolver(FakeStore()))
    assert res.summaries[1].dispatches == 1
    assert res.summaries[1].commission == Decimal("100.00")


def test_active_days_are_distinct_dates():
    ds = [
        _d(1, "10", day=date(2025, 11, 3)),
        _d(1, "10", day=date(2025, 11, 3)),
        _d(1, "10", day=date(2025, 11, 4)),
    ]
    res = aggregate(ds, NOV, CommissionResolver(FakeStore()))
    assert res.summaries[1].active_days == 2


def test_totals_across_employees():
    ds = [_d(1, "10", cash="500"), _d(2, "20", cash="1000", name="Baraka")]
    res = aggregate(ds, day_range(date(2025, 11, 3)), CommissionResolver(FakeStore()))
    totals = res.totals()
    assert totals["commission"] == Decimal("400.00")
    assert totals["sold_amount"] == Decimal("1500.00")
    assert set(res.summaries) == {1, 2}
    assert res.degraded == {}


def test_assigned_plan_wins_over_static_table():
    plan = SimpleNamespace(id=9, brackets_json=[{"min": 0, "max": 100000, "fixed": 42}])
    res = aggregate([_d(1, "10", cash="500")], NOV, CommissionResolver(FakeStore(plans={1: plan})))
    assert res.summaries[1].commission == Decimal("42.00")


def test_failed_plan_lookup_degrades_to_zero():
    store = FakeStore(fail=True)
    res = aggregate([_d(1, "10", cash="500")], NOV, CommissionResolver(store))
    s = res.summaries[1]
    assert s.commission == Decimal("0.00")
    assert s.sold_amount == Decimal("500.00")
    assert s.degraded_reason.startswith("resolver_unavailable")
    assert 1 in res.degraded


def test_resolver_caches_lookups():
    store = FakeStore()
    ds = [_d(1, "10", cash="500") for _ in range(5)]
    aggregate(ds, NOV, CommissionResolver(store))
    # own plan + role default, once each
    assert store.lookups == 2
