# -*- coding: utf-8 -*-
from __future__ import annotations

import logging

from flask import Blueprint, jsonify, request
from flask_login import login_required

from ...core.brackets import STATIC_BRACKETS, parse_brackets
from ...core.preview import BASIS, apply_commission, apply_field_day_commission, preview_commission
from ...errors import ConflictError, InvalidInput
from ...extensions import db
from ...models import COMMISSION_ROLES, CommissionPlan
from ...money import money_str
from ...repository import SqlStore
from ...security import roles_required
from ...serializers import serialize_commission, serialize_plan
from .. import get_day, get_int, json_body

logger = logging.getLogger(__name__)

bp = Blueprint("commission", __name__, url_prefix="/api/commission")


def _role(raw) -> str:
    role = (raw or "").strip().upper()
    if role not in COMMISSION_ROLES:
        raise InvalidInput("role must be INSIDE or FIELD", field="role", value=raw)
    return role


def _applied(out: dict) -> dict:
    body = {k: v for k, v in out.items() if k != "applied"}
    for key in BASIS.values():
        if key in body:
            body[key] = money_str(body[key])
    body["commission"] = serialize_commission(out["applied"])
    return body


# ------------ plans -----------------------------------------------------------
@bp.get("/plans")
def plans():
    q = CommissionPlan.query
    role = request.args.get("role")
    if role:
        q = q.filter(CommissionPlan.role == _role(role))
    rows = q.order_by(CommissionPlan.role, CommissionPlan.name).all()
    return jsonify([serialize_plan(p) for p in rows])


@bp.post("/plans")
@login_required
@roles_required("admin", "manager")
def create_plan():
    data = json_body()
    name = (data.get("name") or "").strip()
    if not name:
        raise InvalidInput("name is required", field="name")
    role = _role(data.get("role"))
    brackets = parse_brackets(data.get("brackets"))
    if not brackets:
        raise InvalidInput("brackets must be a non-empty list of {min,max,fixed}", field="brackets")

    store = SqlStore()
    with store.transaction():
        if CommissionPlan.query.filter_by(name=name).first() is not None:
            raise ConflictError("a plan with this name already exists", name=name)
        plan = CommissionPlan(name=name, role=role, brackets_json=[b.to_dict() for b in brackets])
        db.session.add(plan)
        db.session.flush()
        if data.get("isDefault"):
            store.set_default_plan(plan.id)
    logger.info("commission plan %s created for %s", plan.id, role)
    return jsonify(serialize_plan(plan)), 201


@bp.post("/plans/<int:plan_id>/default")
@login_required
@roles_required("admin", "manager")
def make_default(plan_id: int):
    store = SqlStore()
    with store.transaction():
        plan = store.set_default_plan(plan_id)
    logger.info("commission plan %s is now the %s default", plan.id, plan.role)
    return jsonify(serialize_plan(plan))


@bp.get("/<role>/default")
def default_plan(role: str):
    role = _role(role)
    plan = SqlStore().find_plan(role=role)
    brackets = parse_brackets(plan.brackets_json) if plan is not None else []
    if brackets:
        return jsonify(serialize_plan(plan))
    # nothing stored: the built-in table applies
    return jsonify(
        {
            "id": None,
            "name": f"{role} (built-in)",
            "role": role,
            "isDefault": True,
            "brackets": [b.to_dict() for b in STATIC_BRACKETS[role]],
        }
    )


# ------------ preview / apply -------------------------------------------------
@bp.get("/preview/<int:employee_id>")
def preview(employee_id: int):
    day = get_day(request.args, "dateISO")
    out = preview_commission(SqlStore(), employee_id, day)
    body = dict(out)
    body["commission"] = money_str(out["commission"])
    for key in BASIS.values():
        if key in body:
            body[key] = money_str(body[key])
    nt = out.get("nextTarget")
    body["nextTarget"] = {"target": money_str(nt["target"]), "earns": money_str(nt["earns"])} if nt else None
    return jsonify(body)


@bp.post("/apply/shift/<int:shift_id>")
@login_required
def apply_shift(shift_id: int):
    store = SqlStore()
    with store.transaction():
        out = apply_commission(store, shift_id=shift_id)
    return jsonify(_applied(out))


@bp.post("/apply/dispatch/<int:dispatch_id>")
@login_required
def apply_dispatch(dispatch_id: int):
    store = SqlStore()
    with store.transaction():
        out = apply_commission(store, dispatch_id=dispatch_id)
    return jsonify(_applied(out))


@bp.post("/field/apply")
@login_required
def apply_field_day():
    data = json_body()
    employee_id = get_int(data, "employeeId")
    day = get_day(data, "dateISO")
    store = SqlStore()
    with store.transaction():
        out = apply_field_day_commission(store, employee_id, day)
    return jsonify(_applied(out))
