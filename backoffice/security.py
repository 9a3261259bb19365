# -*- coding: utf-8 -*-
from functools import wraps

from flask import current_app, jsonify
from flask_login import current_user


def roles_required(*roles):
    """
    Not logged in -> 401 JSON.
    Role not in ``roles`` -> 403 JSON.
    Skipped entirely when LOGIN_DISABLED is set, like ``login_required``.
    """
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            if current_app.config.get("LOGIN_DISABLED"):
                return f(*args, **kwargs)
            if not current_user.is_authenticated:
                return jsonify({"error": "unauthorized", "message": "login required"}), 401
            if current_user.role not in roles:
                return jsonify({"error": "forbidden", "message": "insufficient role", "required": list(roles)}), 403
            return f(*args, **kwargs)
        return wrapper
    return decorator


def actor_name():
    """Username recorded on writes; ``None`` when login is off."""
    if current_user and getattr(current_user, "is_authenticated", False):
        return current_user.username
    return None
