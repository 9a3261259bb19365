"""Commission & payroll engine (no HTTP, storage through ``PayrollStore``)."""
from .brackets import Bracket, STATIC_BRACKETS, match_bracket, next_target, parse_brackets
from .commission import CommissionResolver, CommissionResult, resolve_commission
from .reconcile import Reconciliation, reconcile, validate_return
from .aggregate import AggregateResult, EmployeeSummary, aggregate
from .payroll import PayrollOutcome, PayrollRunBuilder, get_payroll_run, run_payroll
from .preview import apply_commission, apply_field_day_commission, preview_commission

__all__ = [
    "Bracket",
    "STATIC_BRACKETS",
    "match_bracket",
    "next_target",
    "parse_brackets",
    "CommissionResolver",
    "CommissionResult",
    "resolve_commission",
    "Reconciliation",
    "reconcile",
    "validate_return",
    "AggregateResult",
    "EmployeeSummary",
    "aggregate",
    "PayrollOutcome",
    "PayrollRunBuilder",
    "get_payroll_run",
    "run_payroll",
    "apply_commission",
    "apply_field_day_commission",
    "preview_commission",
]
