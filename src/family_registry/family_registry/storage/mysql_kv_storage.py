from __future__ import annotations

from typing import Mapping, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import KeyValueStorage

_UPSERT = """
    INSERT INTO kv_store(storage_key, storage_value)
    VALUES(%s,%s)
    ON DUPLICATE KEY UPDATE storage_value=VALUES(storage_value)
"""


class MySQLKeyValueStorage(KeyValueStorage):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT storage_value FROM kv_store WHERE storage_key=%s", (key,))
            row = fetchone(cur)
            if not row:
                return None
            return str(row["storage_value"])

    def set(self, key: str, value: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_UPSERT, (key, value))

    def set_many(self, items: Mapping[str, str]) -> None:
        # One transaction: db_cursor rolls back if any upsert fails.
        with db_cursor(self._conn_factory) as (_, cur):
            for key, value in items.items():
                cur.execute(_UPSERT, (key, value))

    def remove(self, key: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM kv_store WHERE storage_key=%s", (key,))
