# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal

from flask import Blueprint, jsonify
from flask_login import login_required

from ...core.preview import apply_commission
from ...errors import ConflictError, EmployeeNotFound, InvalidInput, InvalidQuantity, ShiftNotFound
from ...extensions import db
from ...models import EMPLOYEE_TYPES, Shift
from ...money import money_str, round2
from ...repository import SqlStore
from ...security import actor_name
from ...serializers import serialize_shift
from .. import get_day, get_decimal, get_int, json_body

logger = logging.getLogger(__name__)

bp = Blueprint("shifts", __name__, url_prefix="/api/shifts")


@bp.post("/open")
@login_required
def open_shift():
    data = json_body()
    employee_id = get_int(data, "employeeId")
    day = get_day(data, "date")

    store = SqlStore()
    with store.transaction():
        emp = store.get_employee(employee_id)
        if emp is None:
            raise EmployeeNotFound("employee not found", employeeId=employee_id)
        waiter_type = (data.get("waiterType") or emp.type or "").strip().upper()
        if waiter_type not in EMPLOYEE_TYPES:
            raise InvalidInput("waiterType must be INSIDE, FIELD or KITCHEN", field="waiterType")
        if store.find_open_shift(emp.id, day) is not None:
            raise ConflictError("employee already has an open shift for this day", employeeId=emp.id)
        shift = Shift(
            employee_id=emp.id,
            waiter_type=waiter_type,
            date=day,
            opened_at=datetime.now(timezone.utc).replace(tzinfo=None),
        )
        db.session.add(shift)
        db.session.flush()
    logger.info("shift %s opened for employee %s (%s)", shift.id, emp.id, waiter_type)
    return jsonify(serialize_shift(shift)), 201


@bp.get("/<int:shift_id>")
def get_shift(shift_id: int):
    shift = SqlStore().get_shift(shift_id)
    if shift is None:
        raise ShiftNotFound("shift not found", shiftId=shift_id)
    return jsonify(serialize_shift(shift))


@bp.post("/<int:shift_id>/close")
@login_required
def close_shift(shift_id: int):
    """Close the shift and write its cashup snapshot (sales, cash, commission)."""
    data = json_body()
    net_sales = get_decimal(data, "netSales", default=Decimal("0"))
    cash = get_decimal(data, "cashCounted", default=Decimal("0"))
    if net_sales < 0 or cash < 0:
        raise InvalidQuantity("netSales and cashCounted must be >= 0")

    store = SqlStore()
    with store.transaction():
        shift = store.get_shift(shift_id)
        if shift is None:
            raise ShiftNotFound("shift not found", shiftId=shift_id)
        if shift.closed_at is not None:
            raise ConflictError("shift already closed", shiftId=shift_id)

        now = datetime.now(timezone.utc).replace(tzinfo=None)
        shift.closed_at = now
        shift.net_sales = round2(net_sales)
        db.session.flush()

        store.upsert_cashup(
            shift,
            {
                "netSales": money_str(net_sales),
                "cashCounted": money_str(cash),
                "closedAt": now.isoformat(),
            },
            note=(data.get("note") or "").strip() or None,
            submitted_by=actor_name(),
        )
        if shift.waiter_type in ("INSIDE", "FIELD"):
            apply_commission(store, shift_id=shift.id)
    logger.info("shift %s closed", shift_id)
    return jsonify(serialize_shift(shift))
