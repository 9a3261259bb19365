from .user import User
from .employee import CommissionPlan, Employee, COMMISSION_ROLES, EMPLOYEE_TYPES
from .field import MenuItem, FieldDispatch, FieldReturn
from .payroll import SalaryDeduction, PayrollRun, PayrollLine, DEDUCTION_REASONS
from .shift import Shift, ShiftCashup

__all__ = [
    "User",
    "CommissionPlan",
    "Employee",
    "COMMISSION_ROLES",
    "EMPLOYEE_TYPES",
    "MenuItem",
    "FieldDispatch",
    "FieldReturn",
    "SalaryDeduction",
    "PayrollRun",
    "PayrollLine",
    "DEDUCTION_REASONS",
    "Shift",
    "ShiftCashup",
]
