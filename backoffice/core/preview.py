# -*- coding: utf-8 -*-
"""Dashboard projections and commission snapshots on shift cashups."""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Optional

from ..errors import EmployeeNotFound, InvalidInput, ResolverUnavailable, ShiftNotFound, DispatchNotFound
from ..money import ZERO
from .brackets import match_bracket, next_target
from .commission import CommissionResolver

logger = logging.getLogger(__name__)

# what each role's brackets are applied to
BASIS = {"INSIDE": "dailySales", "FIELD": "cashCollected"}


def _basis_amount(store, role: str, employee_id: int, day: date):
    if role == "FIELD":
        return store.field_cash_collected(employee_id, day)
    return store.inside_daily_sales(employee_id, day)


def preview_commission(store, employee_id: int, day: date, resolver: Optional[CommissionResolver] = None) -> dict:
    """Read-only: what the employee earns for ``day`` so far and the next step up."""
    emp = store.get_employee(employee_id)
    if emp is None:
        raise EmployeeNotFound("employee not found", employeeId=employee_id)

    role = emp.commission_role
    out: dict[str, Any] = {"dateISO": day.isoformat(), "employeeId": emp.id, "role": role}
    if role is None:
        # kitchen staff earn no commission
        out.update({"commission": ZERO, "nextTarget": None, "planId": None})
        return out

    amount = _basis_amount(store, role, emp.id, day)
    out[BASIS[role]] = amount
    resolver = resolver or CommissionResolver(store)
    try:
        pb = resolver.brackets_for(emp.id, role)
    except ResolverUnavailable as err:
        out.update({"commission": ZERO, "nextTarget": None, "planId": None, "degraded": err.code})
        return out

    hit = match_bracket(pb.brackets, amount)
    out.update(
        {
            "commission": hit.fixed if hit else ZERO,
            "nextTarget": next_target(pb.brackets, amount),
            "planId": pb.plan_id,
        }
    )
    return out


def _apply_to_shift(store, shift, now: Optional[datetime] = None) -> dict:
    role = shift.waiter_type
    if role not in BASIS:
        raise InvalidInput("shift has no commission role", shiftId=shift.id, waiterType=role)

    if role == "INSIDE":
        amount = store.inside_daily_sales(shift.employee_id, shift.date)
    else:
        amount = store.field_cash_collected(shift.employee_id, shift.date)
    res = CommissionResolver(store).resolve(shift.employee_id, amount, role)

    payload = {
        "role": role,
        "planId": res.plan_id,
        "source": res.source,
        "dateISO": shift.date.isoformat(),
        BASIS[role]: f"{amount:.2f}",
        "amount": f"{res.amount:.2f}",
        "bracketMin": str(res.bracket.min) if res.bracket else None,
        "bracketMax": str(res.bracket.max) if res.bracket else None,
        "computedAt": (now or datetime.now(timezone.utc)).isoformat(),
    }
    store.upsert_cashup_commission(shift, payload)
    logger.info(
        "commission applied to shift %s: %s",
        shift.id,
        payload["amount"],
        extra={"shift_id": shift.id, "employee_id": shift.employee_id, "role": role},
    )
    return {"shiftId": shift.id, "employeeId": shift.employee_id, "dateISO": payload["dateISO"],
            BASIS[role]: amount, "applied": res}


def apply_commission(store, shift_id: Optional[int] = None, dispatch_id: Optional[int] = None,
                     now: Optional[datetime] = None) -> dict:
    """Recompute and overwrite ``snapshot["commission"]`` of a shift cashup.

    With ``dispatch_id`` the FIELD shift of that dispatch's employee and
    business day is used (created when missing). Repeating the call
    replaces the previous snapshot instead of adding to it.
    """
    if (shift_id is None) == (dispatch_id is None):
        raise InvalidInput("exactly one of shiftId or dispatchId is required")

    if shift_id is not None:
        shift = store.get_shift(shift_id)
        if shift is None:
            raise ShiftNotFound("shift not found", shiftId=shift_id)
        return _apply_to_shift(store, shift, now)

    dispatch = store.get_dispatch(dispatch_id)
    if dispatch is None:
        raise DispatchNotFound("dispatchId does not exist", dispatchId=dispatch_id)
    shift = store.get_or_create_shift(dispatch.waiter_id, dispatch.date, "FIELD")
    return _apply_to_shift(store, shift, now)


def apply_field_day_commission(store, employee_id: int, day: date, now: Optional[datetime] = None) -> dict:
    emp = store.get_employee(employee_id)
    if emp is None:
        raise EmployeeNotFound("employee not found", employeeId=employee_id)
    if emp.type != "FIELD":
        raise InvalidInput("employee is not a FIELD worker", employeeId=emp.id, type=emp.type)
    shift = store.get_or_create_shift(emp.id, day, "FIELD")
    return _apply_to_shift(store, shift, now)
