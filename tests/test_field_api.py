# -*- coding: utf-8 -*-
from backoffice.models import FieldReturn


def _dispatch(client, waiter, item, **extra):
    body = {"waiterId": waiter.id, "itemId": item.id, "qtyDispatched": 10, "date": "2025-11-03"}
    body.update(extra)
    return client.post("/api/field-dispatch", json=body)


def test_create_dispatch_uses_item_price(client, make_employee, make_item):
    waiter = make_employee()
    item = make_item(price="50")
    r = _dispatch(client, waiter, item)
    assert r.status_code == 201
    data = r.get_json()
    assert data["status"] == "pending"
    assert data["priceEach"] == "50.00"
    assert data["qtyDispatched"] == "10"
    assert data["reconciliation"] is None


def test_create_dispatch_validation(client, make_employee, make_item):
    inside = make_employee("Inside", type="INSIDE")
    waiter = make_employee()
    item = make_item()

    r = _dispatch(client, inside, item)
    assert r.status_code == 400

    r = client.post("/api/field-dispatch", json={"waiterId": waiter.id, "itemId": 999, "qtyDispatched": 1})
    assert r.status_code == 404
    assert r.get_json()["error"] == "menu_item_not_found"

    r = _dispatch(client, waiter, item, qtyDispatched=0)
    assert r.status_code == 400

    r = _dispatch(client, waiter, item, priceEach="-1")
    assert r.status_code == 400

    r = _dispatch(client, waiter, item, qtyDispatched="ten")
    assert r.status_code == 400
    assert r.get_json()["field"] == "qtyDispatched"


def test_return_settles_dispatch(client, make_employee, make_dispatch):
    d = make_dispatch(make_employee(), qty="10", price="50")
    r = client.post(
        "/api/field-return",
        json={"dispatchId": d.id, "qtyReturned": 2, "lossQty": 0, "cashCollected": "400"},
    )
    assert r.status_code == 201
    data = r.get_json()
    assert data["status"] == "settled"
    assert data["reconciliation"] == {"soldQty": "8", "soldAmount": "400.00", "grossSales": "500.00"}
    assert data["return"]["cashCollected"] == "400.00"


def test_second_return_is_rejected(client, make_employee, make_dispatch):
    d = make_dispatch(make_employee())
    assert client.post("/api/field-return", json={"dispatchId": d.id, "qtyReturned": 10}).status_code == 201
    r = client.post("/api/field-return", json={"dispatchId": d.id, "qtyReturned": 0})
    assert r.status_code == 409
    assert r.get_json()["error"] == "duplicate_return"
    assert FieldReturn.query.count() == 1


def test_return_exceeding_dispatch(client, make_employee, make_dispatch):
    d = make_dispatch(make_employee(), qty="10")
    r = client.post("/api/field-return", json={"dispatchId": d.id, "qtyReturned": 8, "lossQty": 3})
    assert r.status_code == 400
    data = r.get_json()
    assert data["error"] == "return_exceeds_dispatch"
    assert data["qtyDispatched"] == "10"
    assert FieldReturn.query.count() == 0


def test_return_cash_over_sold_amount(client, make_employee, make_dispatch):
    d = make_dispatch(make_employee(), qty="10", price="50")
    r = client.post("/api/field-return", json={"dispatchId": d.id, "qtyReturned": 2, "cashCollected": 450})
    assert r.status_code == 400
    assert r.get_json()["error"] == "cash_exceeds_sold_amount"


def test_return_for_unknown_dispatch(client):
    r = client.post("/api/field-return", json={"dispatchId": 404})
    assert r.status_code == 404
    assert r.get_json()["error"] == "dispatch_not_found"


def test_list_dispatches_by_date(client, make_employee, make_dispatch, make_return):
    waiter = make_employee()
    make_return(make_dispatch(waiter), returned="2", cash="400")
    make_dispatch(waiter)
    r = client.get("/api/field-dispatch?date=2025-11-03")
    assert r.status_code == 200
    statuses = sorted(d["status"] for d in r.get_json()["results"])
    assert statuses == ["pending", "settled"]

    assert client.get("/api/field-dispatch?date=2025-11-04").get_json()["results"] == []
    assert client.get("/api/field-dispatch?date=03/11/2025").status_code == 400


def test_daily_and_monthly_reports(client, make_employee, make_dispatch, make_return):
    amina = make_employee("Amina")
    baraka = make_employee("Baraka")
    make_return(make_dispatch(amina), returned="2", cash="400")
    make_return(make_dispatch(amina), returned="2", cash="400")
    make_return(make_dispatch(baraka, qty="20"), cash="1000")

    daily = client.get("/api/field-commission/daily?date=2025-11-03").get_json()
    assert daily["date"] == "2025-11-03"
    assert daily["totals"]["commission"] == "500.00"
    by_name = {row["waiterName"]: row for row in daily["results"]}
    assert by_name["Amina"]["commission"] == "200.00"
    assert by_name["Amina"]["soldAmount"] == "800.00"
    assert by_name["Baraka"]["commission"] == "300.00"

    only_amina = client.get(f"/api/field-commission/daily?date=2025-11-03&waiterId={amina.id}").get_json()
    assert [row["waiterId"] for row in only_amina["results"]] == [amina.id]

    monthly = client.get("/api/field-commission/monthly?year=2025&month=11").get_json()
    assert monthly["totals"]["commission"] == "500.00"
    assert monthly["results"][0]["activeDays"] == 1

    assert client.get("/api/field-commission/monthly?year=2025&month=13").status_code == 400
