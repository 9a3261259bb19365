# -*- coding: utf-8 -*-
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

CENT = Decimal("0.01")
ZERO = Decimal("0")

# thousands separators: comma, plain space, non-breaking space
_SEPARATORS = re.compile(r"[,\s ]+")
# request amounts: plain decimal notation only
_PLAIN_NUMBER = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)")


D = lambda v: Decimal(str(v)) if v is not None else Decimal("0")


def round2(value) -> Decimal:
    """Half-up rounding to cents."""
    return D(value).quantize(CENT, rounding=ROUND_HALF_UP)


def money_str(value) -> str | None:
    """Decimal-safe wire format: ``"1234.50"``; ``None`` stays ``None``."""
    if value is None:
        return None
    return f"{round2(value):.2f}"


def to_decimal(value: Any) -> Decimal | None:
    """Coerce loosely typed numbers (``"1,500"``, ``"2 000"``, ``750``).

    Returns ``None`` for anything that is not a finite number.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, int):
        return Decimal(value)
    s = _SEPARATORS.sub("", str(value)).strip()
    if not s:
        return None
    try:
        d = Decimal(s)
    except InvalidOperation:
        return None
    return d if d.is_finite() else None


def qty_str(value) -> str | None:
    """Quantities without trailing zeros: ``Decimal("8.00")`` -> ``"8"``."""
    if value is None:
        return None
    return format(D(value).normalize(), "f")


def parse_amount(value: Any) -> Decimal | None:
    """Strict counterpart of :func:`to_decimal` for request bodies.

    ``"1,5"`` and ``"2 000"`` are rejected instead of being read as 15 and 2000.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        d = Decimal(str(value))
        return d if d.is_finite() else None
    s = str(value).strip()
    if not _PLAIN_NUMBER.fullmatch(s):
        return None
    return Decimal(s)
