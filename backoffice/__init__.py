# -*- coding: utf-8 -*-
from flask import Flask, jsonify

from .config import Config, ensure_instance
from .errors import register_error_handlers
from .extensions import db, migrate, login_manager
from .logging_setup import configure_logging

# blueprints
from .auth import auth_bp
from .modules.commission import bp as commission_bp
from .modules.field import bp as field_bp
from .modules.payroll import bp as payroll_bp
from .modules.shifts import bp as shifts_bp


def create_app(config_object=None):
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object or Config)
    ensure_instance(app)
    configure_logging(app.config.get("LOG_LEVEL", "INFO"), app.config.get("LOG_JSON", False))

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    # models register their tables on import
    from . import models  # noqa: F401

    register_error_handlers(app)

    # --- blueprints ---
    app.register_blueprint(auth_bp)
    app.register_blueprint(commission_bp)
    app.register_blueprint(field_bp)
    app.register_blueprint(payroll_bp)
    app.register_blueprint(shifts_bp)

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    return app
