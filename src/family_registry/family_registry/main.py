from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container, build_storage
from .core.constants import DEFAULT_FAMILY_ID_PREFIX
from .core.enums import StorageBackend
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig, DatabaseConnection
from .families.controller import register as register_families
from .reports.controller import register as register_reports
from .storage.repository import KeyValueStorage
from .transfer.controller import register as register_transfer
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(*, settings_module: Optional[str] = None, storage: Optional[KeyValueStorage] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates")

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    backend = StorageBackend(getattr(settings, "STORAGE_BACKEND", StorageBackend.MYSQL.value))
    db_config = dict(getattr(settings, "DB_CONFIG", {}) or {})
    logger.info("settings=%s storage=%s", settings_module, backend.value)

    if storage is None:
        if backend == StorageBackend.MYSQL and bool(getattr(settings, "AUTO_INIT_DB", False)):
            conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(conn, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(conn)))
        storage = build_storage(backend=backend, db_config=db_config)

    container = build_container(
        storage=storage,
        admin_username=str(getattr(settings, "ADMIN_USERNAME", "admin")),
        admin_password_hash=str(getattr(settings, "ADMIN_PASSWORD_HASH", "")),
        id_prefix=str(getattr(settings, "FAMILY_ID_PREFIX", DEFAULT_FAMILY_ID_PREFIX)),
    )
    app.extensions["family_registry"] = container

    register_users(app, container)
    register_families(app, container)
    register_transfer(app, container)
    register_reports(app, container)

    return app
