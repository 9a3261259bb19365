# -*- coding: utf-8 -*-
"""Persistence contract the engine depends on.

The engine only talks to storage through this protocol; the SQLAlchemy
implementation lives in ``backoffice.repository``.
"""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, ContextManager, Iterable, Optional, Protocol, Sequence, runtime_checkable

from ..periods import DateRange


@runtime_checkable
class PayrollStore(Protocol):

    # --- reads ---
    def find_plan(self, employee_id: Optional[int] = None, role: Optional[str] = None) -> Any:
        """Employee's assigned plan when ``employee_id`` is given, else the role default."""
        ...

    def get_employee(self, employee_id: int) -> Any: ...

    def find_employees(self, ids: Iterable[int], type: Optional[str] = None) -> Sequence[Any]: ...

    def get_dispatch(self, dispatch_id: int) -> Any: ...

    def find_dispatches(self, date_range: DateRange, employee_id: Optional[int] = None) -> Sequence[Any]:
        """Dispatches dated inside the range, each with its return (or ``None``)."""
        ...

    def find_deductions(self, date_range: DateRange, employee_id: Optional[int] = None) -> Sequence[Any]: ...

    def find_run(self, year: int, month: int) -> Any: ...

    # --- writes ---
    def create_return(self, dispatch_id: int, fields: dict) -> Any: ...

    def create_run(self, year: int, month: int, lines: Sequence[dict]) -> Any: ...

    def delete_run(self, run: Any) -> None: ...

    # --- shifts (commission snapshots) ---
    def get_shift(self, shift_id: int) -> Any: ...

    def get_or_create_shift(self, employee_id: int, day: date, waiter_type: str) -> Any: ...

    def upsert_cashup_commission(self, shift: Any, payload: dict) -> Any:
        """Replace ``snapshot["commission"]`` of the shift's cashup."""
        ...

    def field_cash_collected(self, employee_id: int, day: date) -> Decimal: ...

    def inside_daily_sales(self, employee_id: int, day: date) -> Decimal: ...

    def transaction(self, isolation_level: Optional[str] = None) -> ContextManager[Any]:
        """Atomic scope: commit on success, roll back everything on error."""
        ...
