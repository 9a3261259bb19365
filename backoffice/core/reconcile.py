# -*- coding: utf-8 -*-
"""Sell-through reconciliation of a field dispatch against its return."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from ..errors import CashExceedsSoldAmount, InvalidQuantity, ReturnExceedsDispatch
from ..money import D, ZERO, qty_str, round2


@dataclass(frozen=True)
class Reconciliation:
    sold_qty: Decimal
    sold_amount: Decimal  # rounded to cents
    gross_sales: Decimal  # full precision


def reconcile(dispatch: Any, ret: Any) -> Reconciliation:
    """dispatched -> returned/lost -> sold. Pure, no I/O."""
    qty = D(dispatch.qty_dispatched)
    price = D(dispatch.price_each)
    returned = D(getattr(ret, "qty_returned", 0))
    lost = D(getattr(ret, "loss_qty", 0))

    sold_qty = max(ZERO, qty - returned - lost)
    return Reconciliation(
        sold_qty=sold_qty,
        sold_amount=round2(sold_qty * price),
        gross_sales=qty * price,
    )


def validate_return(dispatch: Any, qty_returned, loss_qty, cash_collected) -> Reconciliation:
    """Checks a return before anything is written; returns its reconciliation."""
    returned, lost, cash = D(qty_returned), D(loss_qty), D(cash_collected)
    for name, v in (("qtyReturned", returned), ("lossQty", lost), ("cashCollected", cash)):
        if v < 0:
            raise InvalidQuantity(f"{name} must be >= 0", field=name, value=qty_str(v))

    dispatched = D(dispatch.qty_dispatched)
    if returned + lost > dispatched:
        raise ReturnExceedsDispatch(
            f"Returned ({qty_str(returned)}) + loss ({qty_str(lost)}) exceeds dispatched ({qty_str(dispatched)})",
            dispatchId=dispatch.id,
            qtyDispatched=qty_str(dispatched),
            attemptedReturned=qty_str(returned),
            attemptedLoss=qty_str(lost),
        )

    rec = reconcile(dispatch, _Pending(returned, lost))
    if cash > rec.sold_amount:
        raise CashExceedsSoldAmount(
            f"Cash collected ({cash}) exceeds sold amount ({rec.sold_amount})",
            dispatchId=dispatch.id,
            soldAmount=f"{rec.sold_amount:.2f}",
            attemptedCash=str(cash),
        )
    return rec


@dataclass(frozen=True)
class _Pending:
    qty_returned: Decimal
    loss_qty: Decimal
