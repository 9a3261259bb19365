# -*- coding: utf-8 -*-
from decimal import Decimal
from types import SimpleNamespace

import pytest

from backoffice.core.reconcile import reconcile, validate_return
from backoffice.errors import CashExceedsSoldAmount, InvalidQuantity, ReturnExceedsDispatch


def _dispatch(qty="10", price="50"):
    return SimpleNamespace(id=7, qty_dispatched=Decimal(qty), price_each=Decimal(price))


def _ret(returned="0", loss="0"):
    return SimpleNamespace(qty_returned=Decimal(returned), loss_qty=Decimal(loss))


def test_sold_quantity_and_amount():
    rec = reconcile(_dispatch(), _ret(returned="2"))
    assert rec.sold_qty == Decimal("8")
    assert rec.sold_amount == Decimal("400.00")
    assert rec.gross_sales == Decimal("500")


def test_loss_is_not_sold():
    rec = reconcile(_dispatch(), _ret(returned="2", loss="3"))
    assert rec.sold_qty == Decimal("5")
    assert rec.sold_amount == Decimal("250.00")


def test_sold_amount_rounds_half_up():
    rec = reconcile(_dispatch(qty="3", price="0.335"), _ret())
    assert rec.sold_amount == Decimal("1.01")


def test_sold_quantity_never_negative():
    rec = reconcile(_dispatch(qty="1"), _ret(returned="2"))
    assert rec.sold_qty == Decimal("0")
    assert rec.sold_amount == Decimal("0.00")


def test_return_plus_loss_over_dispatched_is_rejected():
    with pytest.raises(ReturnExceedsDispatch) as exc:
        validate_return(_dispatch(), "8", "3", "0")
    assert exc.value.details["qtyDispatched"] == "10"
    assert exc.value.details["attemptedReturned"] == "8"
    assert exc.value.details["attemptedLoss"] == "3"
    assert exc.value.status == 400


def test_negative_values_are_rejected():
    with pytest.raises(InvalidQuantity):
        validate_return(_dispatch(), "-1", "0", "0")
    with pytest.raises(InvalidQuantity):
        validate_return(_dispatch(), "0", "0", "-5")


def test_cash_cannot_exceed_sold_amount():
    with pytest.raises(CashExceedsSoldAmount) as exc:
        validate_return(_dispatch(), "2", "0", "400.01")
    assert exc.value.details["soldAmount"] == "400.00"

    rec = validate_return(_dispatch(), "2", "0", "400")
    assert rec.sold_amount == Decimal("400.00")


def test_full_return_is_valid():
    rec = validate_return(_dispatch(), "10", "0", "0")
    assert rec.sold_qty == Decimal("0")


@pytest.mark.parametrize("returned,loss", [("0", "0"), ("2", "0"), ("2", "3"), ("10", "0"), ("0", "10")])
def test_quantities_are_conserved(returned, loss):
    d = _dispatch()
    rec = reconcile(d, _ret(returned, loss))
    assert Decimal(returned) + Decimal(loss) + rec.sold_qty == d.qty_dispatched
    assert rec.sold_qty >= 0
