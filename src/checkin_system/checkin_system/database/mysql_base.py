from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from mysql.connector import errors as mysql_errors

from ..core.exceptions import StoreUnavailableError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

_UNAVAILABLE = (mysql_errors.InterfaceError, mysql_errors.OperationalError, mysql_errors.PoolError)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor) inside one transaction; commit on success."""
    try:
        conn = conn_factory.connect()
    except _UNAVAILABLE as exc:
        logger.error("Database unavailable: %s", exc)
        raise StoreUnavailableError() from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except _UNAVAILABLE as exc:
        logger.error("Database operation failed: %s", exc)
        _safe_rollback(conn)
        raise StoreUnavailableError() from exc
    except Exception:
        _safe_rollback(conn)
        raise
    finally:
        conn.close()


def _safe_rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql_errors.Error:
        logger.warning("Rollback failed; connection already broken")


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def load_json_list(value: Any) -> list:
    """Decode a JSON column; mysql-connector may hand back str, bytes or a list."""

    if value is None:
        return []
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value) if value.strip() else []
    return list(value)
