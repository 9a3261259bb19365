# -*- coding: utf-8 -*-
"""Bracket tables: contiguous ranges mapped to a fixed payout."""
from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Optional, Sequence

from ..money import to_decimal


@dataclass(frozen=True)
class Bracket:
    min: Decimal
    max: Decimal
    fixed: Decimal

    def to_dict(self) -> dict[str, str]:
        return {"min": str(self.min), "max": str(self.max), "fixed": str(self.fixed)}


def _pick(entry: dict, *names: str) -> Any:
    for n in names:
        if entry.get(n) is not None:
            return entry[n]
    return None


def parse_brackets(raw: Any) -> list[Bracket]:
    """Normalize a loosely typed bracket list (list or JSON text).

    Accepts ``{min,max,fixed}`` and ``{from,to,amount}`` entries; entries that
    do not coerce to three finite numbers are dropped. Sorted by ``min``.
    """
    if not raw:
        return []
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError:
            return []
    if not isinstance(raw, (list, tuple)):
        return []

    out: list[Bracket] = []
    for entry in raw:
        if isinstance(entry, Bracket):
            out.append(entry)
            continue
        if not isinstance(entry, dict):
            continue
        lo = to_decimal(_pick(entry, "min", "from"))
        hi = to_decimal(_pick(entry, "max", "to"))
        fixed = to_decimal(_pick(entry, "fixed", "amount"))
        if lo is None or hi is None or fixed is None:
            continue
        out.append(Bracket(lo, hi, fixed))
    out.sort(key=lambda b: b.min)
    return out


def match_bracket(brackets: Sequence[Bracket], value) -> Optional[Bracket]:
    """``min <= v < max``; the last bracket is inclusive on both ends.

    ``v == max`` of an inner bracket only falls through when the next bracket
    starts exactly there; with integer tables like ``100-500, 501-750`` the
    value 500 still belongs to the first bracket.
    """
    v = to_decimal(value)
    if v is None or not brackets:
        return None
    last = len(brackets) - 1
    for i, b in enumerate(brackets):
        if v < b.min:
            continue
        if i == last:
            if v <= b.max:
                return b
        elif v < b.max or (v == b.max and brackets[i + 1].min > v):
            return b
    return None


def next_target(brackets: Sequence[Bracket], value) -> Optional[dict[str, Decimal]]:
    v = to_decimal(value) or Decimal("0")
    for b in brackets:
        if v < b.min:
            return {"target": b.min, "earns": b.fixed}
    return None


def _table(rows: Iterable[tuple[int, int, int]]) -> tuple[Bracket, ...]:
    return tuple(Bracket(Decimal(lo), Decimal(hi), Decimal(fx)) for lo, hi, fx in rows)


# safety net when the stored plan is missing or unusable
STATIC_BRACKETS: dict[str, tuple[Bracket, ...]] = {
    # daily net sales of an inside waiter
    "INSIDE": _table([
        (4000, 5000, 300), (5001, 6000, 350), (6001, 7000, 400), (7001, 8000, 450),
        (8001, 9000, 500), (9001, 10000, 550), (10001, 11000, 600), (11001, 12000, 650),
        (12001, 13000, 700), (13001, 14000, 750), (14001, 15000, 800), (15001, 16000, 850),
        (16001, 17000, 900), (17001, 18000, 950), (18001, 20000, 1000),
    ]),
    # sold amount of a single field dispatch
    "FIELD": _table([
        (100, 500, 100), (501, 750, 200), (751, 1000, 300), (1001, 1500, 350),
        (1501, 2000, 400), (2001, 2500, 450), (2501, 3000, 500), (3001, 3500, 550),
        (3501, 4000, 600), (4001, 4500, 650), (4501, 5000, 700), (5001, 5500, 750),
        (5501, 6000, 800), (6001, 6500, 850), (6501, 7000, 900), (7001, 7500, 950),
        (7501, 8000, 1000), (8001, 8500, 1050), (8501, 9000, 1100), (9001, 9500, 1150),
        (9501, 10000, 1200),
    ]),
}
