# -*- coding: utf-8 -*-
"""Request parsing shared by the API blueprints."""
from __future__ import annotations

from datetime import date
from decimal import Decimal

from flask import current_app, request

from ..errors import InvalidInput
from ..money import parse_amount
from ..periods import business_today, parse_date_iso


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidInput("request body must be a JSON object")
    return data


def get_int(data, key: str, required: bool = True) -> int | None:
    raw = data.get(key)
    if raw is None or str(raw).strip() == "":
        if required:
            raise InvalidInput(f"{key} is required", field=key)
        return None
    if isinstance(raw, bool):
        raise InvalidInput(f"{key} must be an integer", field=key)
    try:
        return int(str(raw).strip())
    except ValueError:
        raise InvalidInput(f"{key} must be an integer", field=key, value=str(raw))


def get_decimal(data, key: str, default: Decimal | None = None) -> Decimal:
    raw = data.get(key)
    if raw is None or (isinstance(raw, str) and raw.strip() == ""):
        if default is None:
            raise InvalidInput(f"{key} is required", field=key)
        return default
    v = parse_amount(raw)
    if v is None:
        raise InvalidInput(f"{key} must be a number", field=key, value=str(raw))
    return v


def request_data() -> dict:
    """JSON body merged with the query string; query values win."""
    return {**json_body(), **request.args.to_dict()}


def get_flag(data, *names: str) -> bool:
    """True when any of ``names`` is set to a truthy value in ``data``."""
    for name in names:
        if str(data.get(name)).strip().lower() in ("1", "true", "yes", "on"):
            return True
    return False


def today() -> date:
    return business_today(current_app.config.get("BUSINESS_TIMEZONE", "UTC"))


def get_day(data, key: str = "date") -> date:
    """Day from ``data[key]``, the business day today when absent."""
    return parse_date_iso(data.get(key), default=today(), field=key)
