# -*- coding: utf-8 -*-
"""Error taxonomy of the commission/payroll engine.

Every error carries a machine-readable ``code``, the HTTP ``status`` the API
maps it to, and structured ``details`` that end up in the JSON body::

    BackofficeError
    +-- ValidationError      400  bad input shape/range, nothing written
    +-- ConflictError        409  valid but already satisfied state
    +-- NotFoundError        404  missing employee/dispatch/shift/run
    +-- ResolverUnavailable  503  plan lookup itself failed
"""
from __future__ import annotations

import logging
from typing import Any

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class BackofficeError(Exception):
    code = "error"
    status = 500

    def __init__(self, message: str = "", **details: Any):
        super().__init__(message or self.code)
        self.message = message or self.code
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        body = {"error": self.code, "message": self.message}
        for k, v in self.details.items():
            body.setdefault(k, v)
        return body


# ------------ validation ------------------------------------------------------
class ValidationError(BackofficeError):
    code = "validation_error"
    status = 400


class InvalidInput(ValidationError):
    code = "invalid_input"


class InvalidQuantity(ValidationError):
    code = "invalid_quantity"


class ReturnExceedsDispatch(ValidationError):
    code = "return_exceeds_dispatch"


class CashExceedsSoldAmount(ValidationError):
    code = "cash_exceeds_sold_amount"


class InvalidPeriod(ValidationError):
    code = "invalid_period"


# ------------ conflicts -------------------------------------------------------
class ConflictError(BackofficeError):
    code = "conflict"
    status = 409


class DuplicateReturn(ConflictError):
    code = "duplicate_return"


class PayrollRunExists(ConflictError):
    code = "payroll_run_exists"

    def __init__(self, message: str = "", run=None, **details: Any):
        super().__init__(message, **details)
        self.run = run


# ------------ not found -------------------------------------------------------
class NotFoundError(BackofficeError):
    code = "not_found"
    status = 404


class EmployeeNotFound(NotFoundError):
    code = "employee_not_found"


class DispatchNotFound(NotFoundError):
    code = "dispatch_not_found"


class MenuItemNotFound(NotFoundError):
    code = "menu_item_not_found"


class ShiftNotFound(NotFoundError):
    code = "shift_not_found"


class PlanNotFound(NotFoundError):
    code = "plan_not_found"


class PayrollRunNotFound(NotFoundError):
    code = "payroll_run_not_found"


class DeductionNotFound(NotFoundError):
    code = "deduction_not_found"


# ------------ storage ---------------------------------------------------------
class ResolverUnavailable(BackofficeError):
    """The plan lookup failed; callers may degrade to a zero commission."""

    code = "resolver_unavailable"
    status = 503


# ------------ flask wiring ----------------------------------------------------
def register_error_handlers(app) -> None:
    from .extensions import db

    @app.errorhandler(BackofficeError)
    def _backoffice_error(err: BackofficeError):
        db.session.rollback()
        if err.status >= 500:
            logger.error("request failed: %s", err.message, extra={"code": err.code})
        body = err.to_dict()
        if isinstance(err, PayrollRunExists) and err.run is not None:
            from .serializers import serialize_run
            body["run"] = serialize_run(err.run)
        return jsonify(body), err.status

    @app.errorhandler(SQLAlchemyError)
    def _storage_error(err: SQLAlchemyError):
        db.session.rollback()
        logger.exception("storage error")
        return jsonify({"error": "storage_error", "message": "database operation failed"}), 500

    @app.errorhandler(HTTPException)
    def _http_error(err: HTTPException):
        return jsonify({"error": err.name.lower().replace(" ", "_"), "message": err.description}), err.code
