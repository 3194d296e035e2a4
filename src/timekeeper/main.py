from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .container import Container, build_container
from .core.exceptions import AuthenticationError, DomainError, NotFoundError, ValidationError
from .database.bootstrap import apply_schema, list_tables, seed_default_admin
from .payroll.controller import register as register_payroll
from .settings import get_settings_module
from .timelogs.controller import register as register_timelogs
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _register_error_handlers(app: Flask) -> None:
    status_by_error = (
        (NotFoundError, 404),
        (AuthenticationError, 401),
        (ValidationError, 400),
    )

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for error_type, status in status_by_error:
            if isinstance(e, error_type):
                return jsonify({"error": str(e)}), status
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(ValueError)
    def handle_bad_value(e: ValueError):
        return jsonify({"error": f"Invalid value: {e}"}), 400

    @app.errorhandler(500)
    def handle_internal_error(e):
        # Flask has already logged the traceback at this point.
        return jsonify({"error": "Internal server error"}), 500


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    """Application factory.

    Passing ``container`` skips all database wiring (used by tests).
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        container = build_container(db_config=db_config)
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn)
            logger.info("schema ready (tables=%d)", len(list_tables(container.conn)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            seed_default_admin(container.users_repo)

    app.extensions["timekeeper"] = container

    _register_error_handlers(app)
    register_users(app, container)
    register_timelogs(app, container)
    register_payroll(app, container)

    return app
