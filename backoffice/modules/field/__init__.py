# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from decimal import Decimal

from flask import Blueprint, jsonify, request
from flask_login import login_required

from ...core.aggregate import aggregate
from ...core.commission import CommissionResolver
from ...errors import DispatchNotFound, EmployeeNotFound, InvalidInput, InvalidQuantity, MenuItemNotFound
from ...extensions import db
from ...models import FieldDispatch, MenuItem
from ...periods import day_range, month_range
from ...repository import SqlStore
from ...security import roles_required
from ...serializers import serialize_aggregate, serialize_dispatch
from .. import get_day, get_decimal, get_int, json_body, today

logger = logging.getLogger(__name__)

bp = Blueprint("field", __name__, url_prefix="/api")


# ------------ dispatch --------------------------------------------------------
@bp.post("/field-dispatch")
@login_required
def create_dispatch():
    data = json_body()
    waiter_id = get_int(data, "waiterId")
    item_id = get_int(data, "itemId")
    qty = get_decimal(data, "qtyDispatched")
    day = get_day(data, "date")

    store = SqlStore()
    with store.transaction():
        waiter = store.get_employee(waiter_id)
        if waiter is None:
            raise EmployeeNotFound("waiter not found", waiterId=waiter_id)
        if waiter.type != "FIELD":
            raise InvalidInput("waiter is not a FIELD worker", waiterId=waiter_id, type=waiter.type)
        item = db.session.get(MenuItem, item_id)
        if item is None:
            raise MenuItemNotFound("menu item not found", itemId=item_id)
        if qty <= 0:
            raise InvalidQuantity("qtyDispatched must be > 0", field="qtyDispatched", value=str(qty))
        # price defaults to the item's current sell price
        price = get_decimal(data, "priceEach", default=Decimal(str(item.price_sell or 0)))
        if price < 0:
            raise InvalidQuantity("priceEach must be >= 0", field="priceEach", value=str(price))

        row = FieldDispatch(waiter_id=waiter.id, item_id=item.id, qty_dispatched=qty, price_each=price, date=day)
        db.session.add(row)
        db.session.flush()
    logger.info("dispatch %s: %s x item %s to waiter %s", row.id, qty, item.id, waiter.id)
    return jsonify(serialize_dispatch(row)), 201


@bp.get("/field-dispatch")
def list_dispatches():
    day = get_day(request.args, "date")
    waiter_id = get_int(request.args, "waiterId", required=False)
    rows = SqlStore().find_dispatches(day_range(day), employee_id=waiter_id)
    return jsonify({"date": day.isoformat(), "results": [serialize_dispatch(d) for d in rows]})


@bp.get("/field-dispatch/<int:dispatch_id>")
def get_dispatch(dispatch_id: int):
    d = SqlStore().get_dispatch(dispatch_id)
    if d is None:
        raise DispatchNotFound("dispatchId does not exist", dispatchId=dispatch_id)
    return jsonify(serialize_dispatch(d))


# ------------ return ----------------------------------------------------------
@bp.post("/field-return")
@login_required
@roles_required("admin", "manager")
def create_return():
    data = json_body()
    dispatch_id = get_int(data, "dispatchId")
    zero = Decimal("0")
    fields = {
        "qty_returned": get_decimal(data, "qtyReturned", default=zero),
        "loss_qty": get_decimal(data, "lossQty", default=zero),
        "cash_collected": get_decimal(data, "cashCollected", default=zero),
        "note": (data.get("note") or "").strip() or None,
    }

    store = SqlStore()
    with store.transaction():
        ret = store.create_return(dispatch_id, fields)
        dispatch = ret.dispatch
    logger.info("return recorded for dispatch %s", dispatch_id, extra={"dispatch_id": dispatch_id})
    return jsonify(serialize_dispatch(dispatch)), 201


# ------------ reports ---------------------------------------------------------
@bp.get("/field-commission/daily")
def daily_report():
    day = get_day(request.args, "date")
    waiter_id = get_int(request.args, "waiterId", required=False)
    store = SqlStore()
    rng = day_range(day)
    agg = aggregate(store.find_dispatches(rng, employee_id=waiter_id), rng, CommissionResolver(store))
    body = serialize_aggregate(agg)
    body["date"] = day.isoformat()
    return jsonify(body)


@bp.get("/field-commission/monthly")
def monthly_report():
    now = today()
    year = get_int(request.args, "year", required=False)
    month = get_int(request.args, "month", required=False)
    if year is None:
        year = now.year
    if month is None:
        month = now.month
    waiter_id = get_int(request.args, "waiterId", required=False)
    store = SqlStore()
    rng = month_range(year, month)
    agg = aggregate(store.find_dispatches(rng, employee_id=waiter_id), rng, CommissionResolver(store))
    body = serialize_aggregate(agg)
    body["year"], body["month"] = rng.start.year, rng.start.month
    return jsonify(body)
