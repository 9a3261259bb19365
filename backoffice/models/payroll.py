from datetime import date
from ..extensions import db

DEDUCTION_REASONS = ("ADVANCE", "BREAKAGE", "LOSS", "OTHER")


class SalaryDeduction(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    employee_id = db.Column(db.Integer, db.ForeignKey("employee.id"), nullable=False, index=True)
    amount = db.Column(db.Numeric(12, 2), nullable=False)
    reason = db.Column(db.String(16), nullable=False, default="ADVANCE")  # ADVANCE|BREAKAGE|LOSS|OTHER
    date = db.Column(db.Date, nullable=False, default=date.today, index=True)
    note = db.Column(db.String(300))
    created_at = db.Column(db.DateTime, server_default=db.func.now())


class PayrollRun(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    period_year = db.Column(db.Integer, nullable=False)
    period_month = db.Column(db.Integer, nullable=False)
    run_at = db.Column(db.DateTime, server_default=db.func.now())

    lines = db.relationship(
        "PayrollLine",
        back_populates="run",
        cascade="all, delete-orphan",
        order_by="PayrollLine.employee_id",
    )
    __table_args__ = (db.UniqueConstraint("period_year", "period_month", name="uq_payroll_period"),)


class PayrollLine(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    payroll_run_id = db.Column(
        db.Integer, db.ForeignKey("payroll_run.id", ondelete="CASCADE"), nullable=False, index=True
    )
    employee_id = db.Column(db.Integer, db.ForeignKey("employee.id"), nullable=False, index=True)
    gross = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    deductions_applied = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    carry_forward = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    net_pay = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    note = db.Column(db.String(255))

    run = db.relationship("PayrollRun", back_populates="lines")
