# -*- coding: utf-8 -*-
import logging

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user

from ..extensions import login_manager
from ..models.user import User

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


@login_manager.unauthorized_handler
def _unauthorized():
    return jsonify({"error": "unauthorized", "message": "login required"}), 401


def _me(u):
    return {"id": u.id, "username": u.username, "fullName": u.full_name, "role": u.role}


@auth_bp.post("/login")
def login():
    data = request.get_json(silent=True) or request.form
    username = (data.get("username") or "").strip()
    password = (data.get("password") or "").strip()
    u = User.query.filter_by(username=username).first()
    if not u or not u.is_active or not u.check_password(password):
        logger.info("failed login for %r", username)
        return jsonify({"error": "invalid_credentials", "message": "wrong username or password"}), 401
    login_user(u, remember=True)
    return jsonify(_me(u))


@auth_bp.post("/logout")
@login_required
def logout():
    logout_user()
    return jsonify({"ok": True})


@auth_bp.get("/me")
@login_required
def me():
    if not current_user.is_authenticated:
        # LOGIN_DISABLED
        return jsonify({"id": None, "username": None, "role": None})
    return jsonify(_me(current_user))
