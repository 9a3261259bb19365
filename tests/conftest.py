# -*- coding: utf-8 -*-
import os
import sys
from datetime import date, datetime
from decimal import Decimal

import pytest

# project root on sys.path when running from tests/
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from backoffice import create_app
from backoffice.config import TestConfig
from backoffice.extensions import db
from backoffice.models import (
    CommissionPlan,
    Employee,
    FieldDispatch,
    FieldReturn,
    MenuItem,
    SalaryDeduction,
    Shift,
    User,
)

DAY = date(2025, 11, 3)


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c


@pytest.fixture
def make_employee(app):
    def _make(name="Amina", type="FIELD", plan=None):
        emp = Employee(name=name, type=type, role="KITCHEN" if type == "KITCHEN" else "WAITER")
        if plan is not None:
            emp.commission_plan = plan
        db.session.add(emp)
        db.session.commit()
        return emp
    return _make


@pytest.fixture
def make_plan(app):
    def _make(name="Field custom", role="FIELD", brackets=None, is_default=False):
        plan = CommissionPlan(
            name=name,
            role=role,
            is_default=is_default,
            brackets_json=brackets if brackets is not None else [{"min": 0, "max": 100000, "fixed": 50}],
        )
        db.session.add(plan)
        db.session.commit()
        return plan
    return _make


@pytest.fixture
def make_item(app):
    def _make(name="Samosa", price="50"):
        item = MenuItem(name=name, price_sell=Decimal(price))
        db.session.add(item)
        db.session.commit()
        return item
    return _make


@pytest.fixture
def make_dispatch(app, make_item):
    items = {}

    def _make(waiter, qty="10", price="50", day=DAY):
        if "item" not in items:
            items["item"] = make_item()
        d = FieldDispatch(
            waiter_id=waiter.id,
            item_id=items["item"].id,
            qty_dispatched=Decimal(qty),
            price_each=Decimal(price),
            date=day,
        )
        db.session.add(d)
        db.session.commit()
        return d
    return _make


@pytest.fixture
def make_return(app):
    def _make(dispatch, returned="0", loss="0", cash="0"):
        r = FieldReturn(
            dispatch=dispatch,
            qty_returned=Decimal(returned),
            loss_qty=Decimal(loss),
            cash_collected=Decimal(cash),
        )
        db.session.add(r)
        db.session.commit()
        return r
    return _make


@pytest.fixture
def make_deduction(app):
    def _make(employee, amount, day=DAY, reason="ADVANCE"):
        row = SalaryDeduction(employee_id=employee.id, amount=Decimal(amount), reason=reason, date=day)
        db.session.add(row)
        db.session.commit()
        return row
    return _make


@pytest.fixture
def make_shift(app):
    def _make(employee, waiter_type=None, day=DAY, net_sales="0"):
        s = Shift(
            employee_id=employee.id,
            waiter_type=waiter_type or employee.type,
            date=day,
            opened_at=datetime(day.year, day.month, day.day, 9, 0),
            net_sales=Decimal(net_sales),
        )
        db.session.add(s)
        db.session.commit()
        return s
    return _make


@pytest.fixture
def make_user(app):
    def _make(username="manager", password="secret", role="manager"):
        u = User(username=username, full_name=username.title(), role=role)
        u.set_password(password)
        db.session.add(u)
        db.session.commit()
        return u
    return _make
