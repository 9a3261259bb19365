# -*- coding: utf-8 -*-
import pytest


@pytest.fixture
def sales(make_employee, make_dispatch, make_return, make_deduction):
    waiter = make_employee()
    make_return(make_dispatch(waiter), returned="2", cash="400")
    make_deduction(waiter, "150")
    return waiter


def test_run_then_conflict_then_overwrite(client, sales):
    r = client.post("/api/payroll/run?year=2025&month=11")
    assert r.status_code == 201
    created = r.get_json()
    assert created["status"] == "created"
    assert created["lines"] == [
        {
            "id": created["lines"][0]["id"],
            "employeeId": sales.id,
            "gross": "100.00",
            "deductionsApplied": "150.00",
            "carryForward": "50.00",
            "netPay": "0.00",
            "note": "carry-forward",
        }
    ]

    r = client.post("/api/payroll/run?year=2025&month=11")
    assert r.status_code == 409
    body = r.get_json()
    assert body["error"] == "payroll_run_exists"
    assert body["run"]["id"] == created["id"]

    r = client.post("/api/payroll/run?year=2025&month=11&overwrite=true")
    assert r.status_code == 200
    assert r.get_json()["status"] == "replaced"


def test_overwrite_flag_from_query_or_body(client, sales):
    period = {"year": 2025, "month": 11}
    assert client.post("/api/payroll/run", json=period).status_code == 201

    r = client.post("/api/payroll/run?overwrite=true", json=period)
    assert r.status_code == 200
    assert r.get_json()["status"] == "replaced"

    r = client.post("/api/payroll/run", json={**period, "overwrite": True})
    assert r.status_code == 200

    r = client.post("/api/payroll/run?rerun=1", json=period)
    assert r.status_code == 200

    r = client.post("/api/payroll/run", json={**period, "overwrite": False})
    assert r.status_code == 409


def test_run_bad_period(client):
    r = client.post("/api/payroll/run?year=2025&month=13")
    assert r.status_code == 400
    assert r.get_json()["error"] == "invalid_period"
    assert client.post("/api/payroll/run").status_code == 400


def test_get_and_list_runs(client, sales):
    client.post("/api/payroll/run", json={"year": 2025, "month": 11})

    r = client.get("/api/payroll/2025-11")
    assert r.status_code == 200
    assert r.get_json()["periodMonth"] == 11

    assert client.get("/api/payroll/2025-12").status_code == 404
    assert client.get("/api/payroll/2025-13").status_code == 400

    runs = client.get("/api/payroll?year=2025").get_json()
    assert [(x["periodYear"], x["periodMonth"], x["lineCount"]) for x in runs] == [(2025, 11, 1)]


def test_payroll_preview(client, sales):
    data = client.get("/api/payroll/preview?year=2025&month=11").get_json()
    assert data["lines"][0]["netPay"] == "0.00"
    assert client.get("/api/payroll").get_json() == []


def test_salary_deductions(client, make_employee):
    emp = make_employee()
    url = "/api/salary-deductions"

    assert client.post(url, json={"employeeId": emp.id, "amount": 0}).status_code == 400
    assert client.post(url, json={"employeeId": emp.id, "amount": 10, "reason": "GIFT"}).status_code == 400
    assert client.post(url, json={"employeeId": 999, "amount": 10}).status_code == 404
    r = client.post(url, json={"employeeId": emp.id, "amount": "1,5"})
    assert r.status_code == 400
    assert r.get_json()["field"] == "amount"

    r = client.post(url, json={"employeeId": emp.id, "amount": "1250.5", "reason": "breakage", "date": "2025-11-10"})
    assert r.status_code == 201
    row = r.get_json()
    assert row["amount"] == "1250.50"
    assert row["reason"] == "BREAKAGE"

    listed = client.get(f"{url}?year=2025&month=11&employeeId={emp.id}").get_json()
    assert [d["id"] for d in listed] == [row["id"]]

    assert client.get(f"{url}/{row['id']}").get_json() == row
    assert client.get(f"{url}/9999").get_json()["error"] == "deduction_not_found"
    assert client.get(f"{url}?year=2025&month=10").get_json() == []
