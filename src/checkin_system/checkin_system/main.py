from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .admin.controller import register as register_admin
from .checkin.controller import register as register_checkin
from .common.responses import error_response
from .container import Container, build_container
from .core.constants import DEFAULT_API_PREFIX, DEFAULT_COLLEGE, DEFAULT_POOL_SIZE, DEFAULT_POOL_TIMEOUT
from .core.exceptions import DomainError
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .health.controller import register as register_health

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["API_PREFIX"] = getattr(settings, "API_PREFIX", DEFAULT_API_PREFIX).rstrip("/")
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            pool_size=int(getattr(settings, "DB_POOL_SIZE", DEFAULT_POOL_SIZE)),
            pool_timeout=float(getattr(settings, "DB_POOL_TIMEOUT", DEFAULT_POOL_TIMEOUT)),
            undo_policy=getattr(settings, "UNDO_POLICY", "mark_absent"),
            default_college=getattr(settings, "DEFAULT_COLLEGE", DEFAULT_COLLEGE),
        )

    app.extensions["checkin_container"] = container

    register_health(app, container)
    register_checkin(app, container)
    register_admin(app, container)
    _register_error_handlers(app)

    return app


def _register_error_handlers(app: Flask) -> None:
    prefix = app.config["API_PREFIX"]

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return error_response(e)

    @app.errorhandler(404)
    def handle_not_found(e):
        if request.path.startswith(prefix):
            return jsonify({"success": False, "message": "Endpoint not found", "path": request.path}), 404
        return jsonify({"success": False, "message": "Not found"}), 404

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return jsonify({"success": False, "message": e.description}), e.code
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"success": False, "message": "Internal server error"}), 500
