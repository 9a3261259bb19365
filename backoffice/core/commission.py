# -*- coding: utf-8 -*-
"""Commission resolution: which plan applies, and what it pays for an amount."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError

from ..errors import ResolverUnavailable
from ..money import ZERO
from .brackets import STATIC_BRACKETS, Bracket, match_bracket, parse_brackets

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanBrackets:
    brackets: tuple[Bracket, ...]
    plan_id: Optional[int] = None
    source: str = "static"  # plan|default|static


@dataclass(frozen=True)
class CommissionResult:
    amount: Decimal
    bracket: Optional[Bracket] = None
    plan_id: Optional[int] = None
    source: str = "static"
    degraded_reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.degraded_reason is None

    @classmethod
    def degraded(cls, reason: str) -> "CommissionResult":
        return cls(amount=ZERO, source="none", degraded_reason=reason)


def plan_brackets(plan: Any, role: Optional[str] = None) -> list[Bracket]:
    """Usable brackets of ``plan``; the role's static table when it has none."""
    brackets = parse_brackets(getattr(plan, "brackets_json", None)) if plan is not None else []
    if brackets:
        return brackets
    r = role or getattr(plan, "role", None)
    return list(STATIC_BRACKETS.get(r, ()))


def resolve_commission(plan: Any, amount, role: Optional[str] = None) -> Decimal:
    """Fixed payout for ``amount`` under ``plan``; ``0`` when nothing matches."""
    hit = match_bracket(plan_brackets(plan, role), amount)
    return hit.fixed if hit else ZERO


@dataclass
class CommissionResolver:
    """Resolves plans through the store; lookups are cached per instance.

    Order: the employee's assigned plan (if it has usable brackets), the
    role's default plan, then the static table for the role.
    """

    store: Any
    _cache: dict = field(default_factory=dict, repr=False)

    def brackets_for(self, employee_id: Optional[int], role: str) -> PlanBrackets:
        key = (employee_id, role)
        if key in self._cache:
            return self._cache[key]
        try:
            found = self._lookup(employee_id, role)
        except SQLAlchemyError as exc:
            raise ResolverUnavailable(
                "commission plan lookup failed", employee_id=employee_id, role=role
            ) from exc
        self._cache[key] = found
        return found

    def _lookup(self, employee_id: Optional[int], role: str) -> PlanBrackets:
        if employee_id is not None:
            own = self.store.find_plan(employee_id=employee_id)
            brs = parse_brackets(getattr(own, "brackets_json", None)) if own is not None else []
            if brs:
                return PlanBrackets(tuple(brs), own.id, "plan")
        default_key = (None, role)
        if employee_id is not None and default_key in self._cache:
            return self._cache[default_key]
        default = self.store.find_plan(role=role)
        brs = parse_brackets(getattr(default, "brackets_json", None)) if default is not None else []
        if brs:
            found = PlanBrackets(tuple(brs), default.id, "default")
        else:
            found = PlanBrackets(STATIC_BRACKETS.get(role, ()), None, "static")
        self._cache[default_key] = found
        return found

    def resolve(self, employee_id: Optional[int], amount, role: str = "FIELD") -> CommissionResult:
        pb = self.brackets_for(employee_id, role)
        hit = match_bracket(pb.brackets, amount)
        return CommissionResult(
            amount=hit.fixed if hit else ZERO,
            bracket=hit,
            plan_id=pb.plan_id,
            source=pb.source,
        )

    def resolve_safe(self, employee_id: Optional[int], amount, role: str = "FIELD") -> CommissionResult:
        """Like ``resolve`` but a failed lookup degrades to zero with a reason."""
        try:
            return self.resolve(employee_id, amount, role)
        except ResolverUnavailable as err:
            logger.warning(
                "commission degraded to zero for employee %s: %s",
                employee_id,
                err.__cause__ or err,
                extra={"employee_id": employee_id, "role": role},
            )
            return CommissionResult.degraded(f"{err.code}: {err.__cause__ or err.message}")
