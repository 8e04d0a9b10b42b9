from __future__ import annotations

import atexit
import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .auth.controller import register as register_auth
from .common.http import register_error_handlers
from .container import Container, build_container
from .core.logger import get_logger, setup_logging
from .database.bootstrap import apply_schema, ensure_admin_user, list_tables
from .payroll.controller import register as register_payroll
from .users.controller import register as register_users
from .worklogs.controller import register as register_worklogs

logger = get_logger("app")


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "Starting",
            extra={
                "settings": settings_module,
                "db": f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
            },
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("Schema ready", extra={"tables": len(list_tables(db_config))})

            admin_email = getattr(settings, "ADMIN_EMAIL", None)
            admin_password = getattr(settings, "ADMIN_PASSWORD", None)
            if admin_email and admin_password:
                ensure_admin_user(
                    db_config,
                    email=admin_email,
                    password=admin_password,
                    name=getattr(settings, "ADMIN_NAME", "Administrator"),
                )

        container = build_container(settings)
        atexit.register(container.close)

    app.extensions["worklog_payroll"] = container

    register_error_handlers(app)
    register_auth(app, container)
    register_users(app, container)
    register_worklogs(app, container)
    register_payroll(app, container)

    return app
