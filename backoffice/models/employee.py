from ..extensions import db

EMPLOYEE_TYPES = ("INSIDE", "FIELD", "KITCHEN")
COMMISSION_ROLES = ("INSIDE", "FIELD")


class CommissionPlan(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False, unique=True)
    role = db.Column(db.String(16), nullable=False, index=True)  # INSIDE|FIELD
    is_default = db.Column(db.Boolean, nullable=False, default=False)
    # loosely typed: [{min,max,fixed}] or [{from,to,amount}], numbers may be strings
    brackets_json = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime, server_default=db.func.now())


class Employee(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    role = db.Column(db.String(16), default="WAITER")  # WAITER|KITCHEN
    type = db.Column(db.String(16), nullable=False, default="INSIDE", index=True)  # INSIDE|FIELD|KITCHEN
    phone = db.Column(db.String(32))
    commission_plan_id = db.Column(db.Integer, db.ForeignKey("commission_plan.id"), nullable=True)
    active = db.Column(db.Boolean, default=True)

    commission_plan = db.relationship("CommissionPlan", lazy="joined")

    @property
    def commission_role(self):
        return self.type if self.type in COMMISSION_ROLES else None
