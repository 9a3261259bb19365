from datetime import date
from ..extensions import db


class MenuItem(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(180), nullable=False, index=True)
    price_sell = db.Column(db.Numeric(12, 2), default=0)
    unit = db.Column(db.String(32), default="unit")
    active = db.Column(db.Boolean, default=True)


class FieldDispatch(db.Model):
    """Stock handed to a field worker; settled by exactly one FieldReturn."""

    id = db.Column(db.Integer, primary_key=True)
    waiter_id = db.Column(db.Integer, db.ForeignKey("employee.id"), nullable=False, index=True)
    item_id = db.Column(db.Integer, db.ForeignKey("menu_item.id"), nullable=False)
    qty_dispatched = db.Column(db.Numeric(12, 2), nullable=False)
    price_each = db.Column(db.Numeric(12, 2), nullable=False)
    date = db.Column(db.Date, nullable=False, default=date.today, index=True)  # business day
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    waiter = db.relationship("Employee", lazy="joined")
    item = db.relationship("MenuItem", lazy="joined")
    ret = db.relationship("FieldReturn", back_populates="dispatch", uselist=False, lazy="joined")

    @property
    def status(self) -> str:
        return "settled" if self.ret is not None else "pending"


class FieldReturn(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    dispatch_id = db.Column(db.Integer, db.ForeignKey("field_dispatch.id"), nullable=False, unique=True)
    qty_returned = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    loss_qty = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    cash_collected = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    note = db.Column(db.String(200))
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    dispatch = db.relationship("FieldDispatch", back_populates="ret")
