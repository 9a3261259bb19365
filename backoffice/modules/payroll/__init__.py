# -*- coding: utf-8 -*-
from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify, request
from flask_login import login_required

from ...core.payroll import CREATED, PayrollRunBuilder, get_payroll_run
from ...errors import DeductionNotFound, EmployeeNotFound, InvalidInput, InvalidQuantity
from ...extensions import db
from ...models import DEDUCTION_REASONS, SalaryDeduction
from ...money import round2
from ...periods import month_range, parse_ym
from ...repository import SqlStore
from ...security import roles_required
from ...serializers import serialize_deduction, serialize_line_preview, serialize_run, serialize_run_header
from .. import get_day, get_decimal, get_flag, get_int, json_body, request_data, today

logger = logging.getLogger(__name__)

bp = Blueprint("payroll", __name__, url_prefix="/api")


# ------------ helpers ---------------------------------------------------------
def _period_args(data):
    year = get_int(data, "year")
    month = get_int(data, "month")
    rng = month_range(year, month)
    return rng.start.year, rng.start.month


def _builder(store) -> PayrollRunBuilder:
    return PayrollRunBuilder(store, isolation_level=current_app.config.get("PAYROLL_ISOLATION_LEVEL"))


# ------------ payroll runs ----------------------------------------------------
@bp.post("/payroll/run")
@login_required
@roles_required("admin", "manager")
def run():
    data = request_data()
    year, month = _period_args(data)
    overwrite = get_flag(data, "overwrite", "rerun")
    outcome = _builder(SqlStore()).run(year, month, overwrite=overwrite)
    body = serialize_run(outcome.run)
    body["status"] = outcome.status
    return jsonify(body), (201 if outcome.status == CREATED else 200)


@bp.get("/payroll/preview")
def preview():
    year, month = _period_args(request_data())
    lines = _builder(SqlStore()).preview(year, month)
    return jsonify(
        {
            "periodYear": year,
            "periodMonth": month,
            "lines": [serialize_line_preview(l) for l in lines],
        }
    )


@bp.get("/payroll")
def list_runs():
    year = get_int(request.args, "year", required=False)
    runs = SqlStore().list_runs(year)
    return jsonify([serialize_run_header(r) for r in runs])


@bp.get("/payroll/<period>")
def get_run(period: str):
    year, month = parse_ym(period)
    return jsonify(serialize_run(get_payroll_run(SqlStore(), year, month)))


# ------------ salary deductions -----------------------------------------------
@bp.post("/salary-deductions")
@login_required
@roles_required("admin", "manager")
def create_deduction():
    data = json_body()
    employee_id = get_int(data, "employeeId")
    amount = get_decimal(data, "amount")
    if amount <= 0:
        raise InvalidQuantity("amount must be > 0", field="amount", value=str(amount))
    reason = (data.get("reason") or "ADVANCE").strip().upper()
    if reason not in DEDUCTION_REASONS:
        raise InvalidInput("reason must be one of " + ", ".join(DEDUCTION_REASONS), field="reason", value=reason)
    day = get_day(data, "date")

    store = SqlStore()
    with store.transaction():
        if store.get_employee(employee_id) is None:
            raise EmployeeNotFound("employee not found", employeeId=employee_id)
        row = SalaryDeduction(
            employee_id=employee_id,
            amount=round2(amount),
            reason=reason,
            date=day,
            note=(data.get("note") or "").strip() or None,
        )
        db.session.add(row)
        db.session.flush()
    logger.info("deduction %s for employee %s: %s %s", row.id, employee_id, row.amount, reason)
    return jsonify(serialize_deduction(row)), 201


@bp.get("/salary-deductions")
def list_deductions():
    now = today()
    year = get_int(request.args, "year", required=False)
    month = get_int(request.args, "month", required=False)
    rng = month_range(now.year if year is None else year, now.month if month is None else month)
    employee_id = get_int(request.args, "employeeId", required=False)
    rows = SqlStore().find_deductions(rng, employee_id=employee_id)
    return jsonify([serialize_deduction(r) for r in rows])


@bp.get("/salary-deductions/<int:deduction_id>")
def get_deduction(deduction_id: int):
    row = SqlStore().get_deduction(deduction_id)
    if row is None:
        raise DeductionNotFound("salary deduction not found", deductionId=deduction_id)
    return jsonify(serialize_deduction(row))
