# -*- coding: utf-8 -*-
from backoffice.models import CommissionPlan, Shift


FIELD_PLAN = [{"min": 0, "max": 1000, "fixed": 50}, {"min": 1000, "max": 5000, "fixed": 120}]


def test_preview_field_employee(client, make_employee, make_dispatch, make_return):
    waiter = make_employee()
    make_return(make_dispatch(waiter, qty="10", price="50"), returned="2", cash="400")

    r = client.get(f"/api/commission/preview/{waiter.id}?dateISO=2025-11-03")
    assert r.status_code == 200
    data = r.get_json()
    assert data["role"] == "FIELD"
    assert data["cashCollected"] == "400.00"
    assert data["commission"] == "100.00"
    assert data["nextTarget"] == {"target": "501.00", "earns": "200.00"}
    assert data["planId"] is None


def test_preview_uses_assigned_plan(client, make_employee, make_plan, make_dispatch, make_return):
    plan = make_plan(brackets=FIELD_PLAN)
    waiter = make_employee(plan=plan)
    make_return(make_dispatch(waiter), cash="500")

    data = client.get(f"/api/commission/preview/{waiter.id}?dateISO=2025-11-03").get_json()
    assert data["commission"] == "50.00"
    assert data["planId"] == plan.id
    assert data["nextTarget"] == {"target": "1000.00", "earns": "120.00"}


def test_preview_kitchen_and_unknown(client, make_employee):
    cook = make_employee("Chef", type="KITCHEN")
    data = client.get(f"/api/commission/preview/{cook.id}?dateISO=2025-11-03").get_json()
    assert data["role"] is None
    assert data["commission"] == "0.00"

    assert client.get("/api/commission/preview/999").status_code == 404
    assert client.get(f"/api/commission/preview/{cook.id}?dateISO=nope").status_code == 400


def test_preview_inside_daily_sales(client, make_employee, make_shift):
    waiter = make_employee("Inside", type="INSIDE")
    make_shift(waiter, net_sales="6500")
    data = client.get(f"/api/commission/preview/{waiter.id}?dateISO=2025-11-03").get_json()
    assert data["role"] == "INSIDE"
    assert data["dailySales"] == "6500.00"
    assert data["commission"] == "400.00"


def test_create_plan_and_switch_default(client):
    r = client.post("/api/commission/plans", json={"name": "A", "role": "FIELD", "brackets": FIELD_PLAN, "isDefault": True})
    assert r.status_code == 201
    a = r.get_json()
    assert a["isDefault"] is True
    assert a["brackets"][0] == {"min": "0", "max": "1000", "fixed": "50"}

    r = client.post("/api/commission/plans", json={"name": "B", "role": "FIELD", "brackets": FIELD_PLAN})
    b = r.get_json()
    assert b["isDefault"] is False

    assert client.get("/api/commission/FIELD/default").get_json()["id"] == a["id"]
    assert client.post(f"/api/commission/plans/{b['id']}/default").status_code == 200
    assert client.get("/api/commission/field/default").get_json()["id"] == b["id"]

    defaults = CommissionPlan.query.filter_by(role="FIELD", is_default=True).all()
    assert [p.id for p in defaults] == [b["id"]]


def test_create_plan_validation(client, make_plan):
    make_plan(name="Taken")
    assert client.post("/api/commission/plans", json={"name": "X", "role": "BOSS", "brackets": FIELD_PLAN}).status_code == 400
    assert client.post("/api/commission/plans", json={"name": "X", "role": "FIELD", "brackets": []}).status_code == 400
    r = client.post("/api/commission/plans", json={"name": "Taken", "role": "FIELD", "brackets": FIELD_PLAN})
    assert r.status_code == 409
    assert client.post("/api/commission/plans/999/default").status_code == 404


def test_builtin_default_when_nothing_stored(client):
    data = client.get("/api/commission/FIELD/default").get_json()
    assert data["id"] is None
    assert len(data["brackets"]) == 21
    assert client.get("/api/commission/KITCHEN/default").status_code == 400


def test_apply_to_dispatch_is_idempotent(client, make_employee, make_dispatch, make_return):
    waiter = make_employee()
    d = make_dispatch(waiter)
    make_return(d, returned="2", cash="400")

    r = client.post(f"/api/commission/apply/dispatch/{d.id}")
    assert r.status_code == 200
    data = r.get_json()
    assert data["commission"]["amount"] == "100.00"
    assert data["cashCollected"] == "400.00"

    client.post(f"/api/commission/apply/dispatch/{d.id}")
    shifts = Shift.query.filter_by(employee_id=waiter.id).all()
    assert len(shifts) == 1
    snap = shifts[0].cashup.snapshot["commission"]
    assert snap["amount"] == "100.00"
    assert snap["bracketMin"] == "100"
    assert snap["source"] == "static"


def test_apply_field_day(client, make_employee, make_dispatch, make_return):
    waiter = make_employee()
    make_return(make_dispatch(waiter, qty="20"), cash="1000")

    r = client.post("/api/commission/field/apply", json={"employeeId": waiter.id, "dateISO": "2025-11-03"})
    assert r.status_code == 200
    assert r.get_json()["commission"]["amount"] == "300.00"

    inside = make_employee("Inside", type="INSIDE")
    r = client.post("/api/commission/field/apply", json={"employeeId": inside.id, "dateISO": "2025-11-03"})
    assert r.status_code == 400


def test_apply_to_shift(client, make_employee, make_shift):
    waiter = make_employee("Inside", type="INSIDE")
    shift = make_shift(waiter, net_sales="4000")
    r = client.post(f"/api/commission/apply/shift/{shift.id}")
    assert r.status_code == 200
    assert r.get_json()["commission"]["amount"] == "300.00"

    cook = make_employee("Chef", type="KITCHEN")
    assert client.post(f"/api/commission/apply/shift/{make_shift(cook).id}").status_code == 400
    assert client.post("/api/commission/apply/shift/999").status_code == 404
