from ..extensions import db


class Shift(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    employee_id = db.Column(db.Integer, db.ForeignKey("employee.id"), nullable=False, index=True)
    waiter_type = db.Column(db.String(16), nullable=False, default="INSIDE")  # INSIDE|FIELD|KITCHEN
    date = db.Column(db.Date, nullable=False, index=True)
    opened_at = db.Column(db.DateTime, nullable=False)
    closed_at = db.Column(db.DateTime, nullable=True)
    net_sales = db.Column(db.Numeric(12, 2), default=0)
    notes = db.Column(db.Text)

    cashup = db.relationship("ShiftCashup", back_populates="shift", uselist=False, lazy="joined")

    @property
    def status(self) -> str:
        return "CLOSED" if self.closed_at else "OPEN"


class ShiftCashup(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    shift_id = db.Column(db.Integer, db.ForeignKey("shift.id"), nullable=False, unique=True)
    snapshot = db.Column(db.JSON, nullable=False, default=dict)
    note = db.Column(db.Text)
    submitted_by = db.Column(db.String(128))
    created_at = db.Column(db.DateTime, server_default=db.func.now(), index=True)

    shift = db.relationship("Shift", back_populates="cashup")
