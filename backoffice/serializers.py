# -*- coding: utf-8 -*-
"""JSON shapes of the API. Money always leaves as a 2-decimal string."""
from __future__ import annotations

from typing import Any

from .core.aggregate import AggregateResult, EmployeeSummary
from .core.brackets import parse_brackets
from .core.commission import CommissionResult
from .core.reconcile import reconcile
from .money import money_str, qty_str


def _iso(v):
    return v.isoformat() if v is not None else None


def serialize_line(row) -> dict[str, Any]:
    return {
        "id": row.id,
        "employeeId": row.employee_id,
        "gross": money_str(row.gross),
        "deductionsApplied": money_str(row.deductions_applied),
        "carryForward": money_str(row.carry_forward),
        "netPay": money_str(row.net_pay),
        "note": row.note,
    }


def serialize_run(run) -> dict[str, Any]:
    return {
        "id": run.id,
        "periodYear": run.period_year,
        "periodMonth": run.period_month,
        "runAt": _iso(run.run_at),
        "lines": [serialize_line(l) for l in run.lines],
    }


def serialize_run_header(run) -> dict[str, Any]:
    return {
        "id": run.id,
        "periodYear": run.period_year,
        "periodMonth": run.period_month,
        "runAt": _iso(run.run_at),
        "lineCount": len(run.lines),
    }


def serialize_return(row) -> dict[str, Any]:
    return {
        "id": row.id,
        "dispatchId": row.dispatch_id,
        "qtyReturned": qty_str(row.qty_returned),
        "lossQty": qty_str(row.loss_qty),
        "cashCollected": money_str(row.cash_collected),
        "note": row.note,
        "createdAt": _iso(row.created_at),
    }


def serialize_dispatch(d) -> dict[str, Any]:
    body = {
        "id": d.id,
        "waiterId": d.waiter_id,
        "waiterName": d.waiter.name if d.waiter is not None else None,
        "itemId": d.item_id,
        "itemName": d.item.name if d.item is not None else None,
        "qtyDispatched": qty_str(d.qty_dispatched),
        "priceEach": money_str(d.price_each),
        "date": _iso(d.date),
        "status": d.status,
        "return": serialize_return(d.ret) if d.ret is not None else None,
        "reconciliation": None,
    }
    if d.ret is not None:
        rec = reconcile(d, d.ret)
        body["reconciliation"] = {
            "soldQty": qty_str(rec.sold_qty),
            "soldAmount": money_str(rec.sold_amount),
            "grossSales": money_str(rec.gross_sales),
        }
    return body


def serialize_summary(s: EmployeeSummary) -> dict[str, Any]:
    body = {
        "waiterId": s.employee_id,
        "waiterName": s.employee_name,
        "soldAmount": money_str(s.sold_amount),
        "commission": money_str(s.commission),
        "cashRemit": money_str(s.cash_remit),
        "grossSales": money_str(s.gross_sales),
        "activeDays": s.active_days,
        "dispatches": s.dispatches,
    }
    if s.degraded_reason:
        body["degraded"] = s.degraded_reason
    return body


def serialize_aggregate(agg: AggregateResult) -> dict[str, Any]:
    totals = agg.totals()
    results = sorted(agg.summaries.values(), key=lambda s: (s.employee_name.lower(), s.employee_id))
    return {
        "range": {"from": agg.date_range.start.isoformat(), "to": agg.date_range.end.isoformat()},
        "totals": {
            "soldAmount": money_str(totals["sold_amount"]),
            "commission": money_str(totals["commission"]),
            "cashRemit": money_str(totals["cash_remit"]),
            "grossSales": money_str(totals["gross_sales"]),
        },
        "results": [serialize_summary(s) for s in results],
        "degraded": {str(k): v for k, v in agg.degraded.items()},
    }


def serialize_plan(plan) -> dict[str, Any]:
    return {
        "id": plan.id,
        "name": plan.name,
        "role": plan.role,
        "isDefault": bool(plan.is_default),
        "brackets": [b.to_dict() for b in parse_brackets(plan.brackets_json)],
    }


def serialize_commission(res: CommissionResult) -> dict[str, Any]:
    return {
        "amount": money_str(res.amount),
        "bracketMin": str(res.bracket.min) if res.bracket else None,
        "bracketMax": str(res.bracket.max) if res.bracket else None,
        "planId": res.plan_id,
        "source": res.source,
    }


def serialize_deduction(row) -> dict[str, Any]:
    return {
        "id": row.id,
        "employeeId": row.employee_id,
        "amount": money_str(row.amount),
        "reason": row.reason,
        "date": _iso(row.date),
        "note": row.note,
    }


def serialize_shift(s) -> dict[str, Any]:
    return {
        "id": s.id,
        "employeeId": s.employee_id,
        "waiterType": s.waiter_type,
        "date": _iso(s.date),
        "openedAt": _iso(s.opened_at),
        "closedAt": _iso(s.closed_at),
        "netSales": money_str(s.net_sales),
        "status": s.status,
        "hasCashup": s.cashup is not None,
        "cashup": s.cashup.snapshot if s.cashup is not None else None,
    }


def serialize_line_preview(line: dict[str, Any]) -> dict[str, Any]:
    """Same shape as a stored line, built from an unsaved line dict."""
    return {
        "employeeId": line["employee_id"],
        "gross": money_str(line["gross"]),
        "deductionsApplied": money_str(line["deductions_applied"]),
        "carryForward": money_str(line["carry_forward"]),
        "netPay": money_str(line["net_pay"]),
        "note": line["note"],
    }
