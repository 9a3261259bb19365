# -*- coding: utf-8 -*-
"""SQLAlchemy implementation of the engine's persistence contract."""
from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from .core.reconcile import validate_return
from .errors import DispatchNotFound, DuplicateReturn, PlanNotFound
from .extensions import db
from .models import (
    CommissionPlan,
    Employee,
    FieldDispatch,
    FieldReturn,
    PayrollLine,
    PayrollRun,
    SalaryDeduction,
    Shift,
    ShiftCashup,
)
from .money import D
from .periods import DateRange


class SqlStore:
    """Works on the current ``db.session``; one instance per request is fine."""

    def __init__(self, session=None, savepoints: Optional[bool] = None):
        self.session = session or db.session
        self._savepoints = savepoints

    # ------------ transactions ------------------------------------------------
    @contextmanager
    def transaction(self, isolation_level: Optional[str] = None):
        s = self.session
        if isolation_level and not s.in_transaction():
            s.connection(execution_options={"isolation_level": isolation_level})
        try:
            yield self
            s.commit()
        except BaseException:
            s.rollback()
            raise

    @contextmanager
    def tolerated_read(self):
        """Savepoint around a read whose failure the caller absorbs.

        PostgreSQL refuses every later statement of a transaction once one has
        failed; SQLite does not, and pysqlite savepoints are unreliable.
        """
        if self._savepoints is None:
            self._savepoints = self.session.get_bind().dialect.name != "sqlite"
        if not self._savepoints:
            yield
            return
        with self.session.begin_nested():
            yield

    # ------------ plans -------------------------------------------------------
    def find_plan(self, employee_id: Optional[int] = None, role: Optional[str] = None):
        if employee_id is None and role is None:
            return None
        with self.tolerated_read():
            if employee_id is not None:
                emp = self.session.get(Employee, employee_id)
                return emp.commission_plan if emp is not None else None
            return (
                self.session.query(CommissionPlan)
                .filter(CommissionPlan.role == role, CommissionPlan.is_default.is_(True))
                .order_by(CommissionPlan.id.desc())
                .first()
            )

    def set_default_plan(self, plan_id: int) -> CommissionPlan:
        """Make ``plan_id`` the only default of its role (caller commits)."""
        plan = self.session.get(CommissionPlan, plan_id)
        if plan is None:
            raise PlanNotFound("commission plan not found", planId=plan_id)
        self.session.query(CommissionPlan).filter(
            CommissionPlan.role == plan.role, CommissionPlan.id != plan.id
        ).update({CommissionPlan.is_default: False}, synchronize_session="fetch")
        plan.is_default = True
        self.session.flush()
        return plan

    # ------------ employees ---------------------------------------------------
    def get_employee(self, employee_id: int) -> Optional[Employee]:
        return self.session.get(Employee, employee_id)

    def find_employees(self, ids: Iterable[int], type: Optional[str] = None) -> Sequence[Employee]:
        ids = list(ids)
        if not ids:
            return []
        q = self.session.query(Employee).filter(Employee.id.in_(ids))
        if type is not None:
            q = q.filter(Employee.type == type)
        return q.order_by(Employee.id).all()

    # ------------ dispatches / returns ----------------------------------------
    def get_dispatch(self, dispatch_id: int) -> Optional[FieldDispatch]:
        return self.session.get(FieldDispatch, dispatch_id)

    def find_dispatches(self, date_range: DateRange, employee_id: Optional[int] = None) -> Sequence[FieldDispatch]:
        q = self.session.query(FieldDispatch).filter(
            FieldDispatch.date >= date_range.start,
            FieldDispatch.date <= date_range.end,
        )
        if employee_id is not None:
            q = q.filter(FieldDispatch.waiter_id == employee_id)
        return q.order_by(FieldDispatch.date.asc(), FieldDispatch.id.asc()).all()

    def create_return(self, dispatch_id: int, fields: dict) -> FieldReturn:
        dispatch = self.get_dispatch(dispatch_id)
        if dispatch is None:
            raise DispatchNotFound("dispatchId does not exist", dispatchId=dispatch_id)
        if dispatch.ret is not None:
            raise DuplicateReturn("Return already recorded for this dispatchId", dispatchId=dispatch_id)

        qty_returned = D(fields.get("qty_returned"))
        loss_qty = D(fields.get("loss_qty"))
        cash = D(fields.get("cash_collected"))
        validate_return(dispatch, qty_returned, loss_qty, cash)

        row = FieldReturn(
            dispatch=dispatch,
            qty_returned=qty_returned,
            loss_qty=loss_qty,
            cash_collected=cash,
            note=fields.get("note"),
        )
        self.session.add(row)
        try:
            self.session.flush()
        except IntegrityError as exc:
            self.session.rollback()
            raise DuplicateReturn(
                "Return already recorded for this dispatchId", dispatchId=dispatch_id
            ) from exc
        return row

    # ------------ deductions --------------------------------------------------
    def get_deduction(self, deduction_id: int) -> Optional[SalaryDeduction]:
        return self.session.get(SalaryDeduction, deduction_id)

    def find_deductions(self, date_range: DateRange, employee_id: Optional[int] = None) -> Sequence[SalaryDeduction]:
        q = self.session.query(SalaryDeduction).filter(
            SalaryDeduction.date >= date_range.start,
            SalaryDeduction.date <= date_range.end,
        )
        if employee_id is not None:
            q = q.filter(SalaryDeduction.employee_id == employee_id)
        return q.order_by(SalaryDeduction.date.asc(), SalaryDeduction.id.asc()).all()

    # ------------ payroll runs ------------------------------------------------
    def find_run(self, year: int, month: int) -> Optional[PayrollRun]:
        return (
            self.session.query(PayrollRun)
            .filter(PayrollRun.period_year == year, PayrollRun.period_month == month)
            .first()
        )

    def list_runs(self, year: Optional[int] = None) -> Sequence[PayrollRun]:
        q = self.session.query(PayrollRun)
        if year is not None:
            q = q.filter(PayrollRun.period_year == year)
        return q.order_by(PayrollRun.period_year.desc(), PayrollRun.period_month.desc()).all()

    def delete_run(self, run: PayrollRun) -> None:
        self.session.delete(run)
        # the delete must hit the table before the replacement insert
        self.session.flush()

    def create_run(self, year: int, month: int, lines: Sequence[dict]) -> PayrollRun:
        run = PayrollRun(period_year=year, period_month=month)
        run.lines = [PayrollLine(**line) for line in lines]
        self.session.add(run)
        self.session.flush()
        return run

    # ------------ shifts / cashups --------------------------------------------
    def get_shift(self, shift_id: int) -> Optional[Shift]:
        return self.session.get(Shift, shift_id)

    def find_shift(self, employee_id: int, day: date, waiter_type: str) -> Optional[Shift]:
        return (
            self.session.query(Shift)
            .filter(Shift.employee_id == employee_id, Shift.date == day, Shift.waiter_type == waiter_type)
            .order_by(Shift.opened_at.desc())
            .first()
        )

    def find_open_shift(self, employee_id: int, day: date) -> Optional[Shift]:
        return (
            self.session.query(Shift)
            .filter(Shift.employee_id == employee_id, Shift.date == day, Shift.closed_at.is_(None))
            .first()
        )

    def get_or_create_shift(self, employee_id: int, day: date, waiter_type: str) -> Shift:
        shift = self.find_shift(employee_id, day, waiter_type)
        if shift is None:
            shift = Shift(
                employee_id=employee_id,
                waiter_type=waiter_type,
                date=day,
                opened_at=datetime(day.year, day.month, day.day),
            )
            self.session.add(shift)
            self.session.flush()
        return shift

    def upsert_cashup(self, shift: Shift, fields: dict, note=None, submitted_by=None) -> ShiftCashup:
        """Merge ``fields`` into the shift's cashup snapshot, creating the cashup if needed."""
        cashup = shift.cashup
        if cashup is None:
            cashup = ShiftCashup(shift_id=shift.id, snapshot=dict(fields))
            self.session.add(cashup)
            shift.cashup = cashup
        else:
            # new dict so the JSON column is marked dirty
            cashup.snapshot = {**(cashup.snapshot or {}), **fields}
        if note is not None:
            cashup.note = note
        if submitted_by is not None:
            cashup.submitted_by = submitted_by
        self.session.flush()
        return cashup

    def upsert_cashup_commission(self, shift: Shift, payload: dict) -> ShiftCashup:
        return self.upsert_cashup(shift, {"commission": payload})

    def field_cash_collected(self, employee_id: int, day: date) -> Decimal:
        """Cash of settled dispatches dated ``day`` (dispatch date, not return time)."""
        total = (
            self.session.query(func.coalesce(func.sum(FieldReturn.cash_collected), 0))
            .join(FieldDispatch, FieldDispatch.id == FieldReturn.dispatch_id)
            .filter(FieldDispatch.waiter_id == employee_id, FieldDispatch.date == day)
            .scalar()
        )
        return D(total)

    def inside_daily_sales(self, employee_id: int, day: date) -> Decimal:
        total = (
            self.session.query(func.coalesce(func.sum(Shift.net_sales), 0))
            .filter(Shift.employee_id == employee_id, Shift.date == day, Shift.waiter_type == "INSIDE")
            .scalar()
        )
        return D(total)
