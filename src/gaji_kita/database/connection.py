from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Optional

import mysql.connector

from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    Inside `transaction()` every repository call on the same thread shares one
    connection, committed once at the end.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._local = threading.local()

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )

    def active_connection(self) -> Optional[Any]:
        return getattr(self._local, "conn", None)

    @contextmanager
    def transaction(self) -> Iterator[Any]:
        current = self.active_connection()
        if current is not None:
            # Nested: the outermost transaction commits.
            yield current
            return

        try:
            conn = self.connect()
        except mysql.connector.Error as e:
            raise _storage_error(e) from e
        self._local.conn = conn
        try:
            yield conn
            conn.commit()
        except mysql.connector.Error as e:
            self._rollback(conn)
            raise _storage_error(e) from e
        except Exception:
            self._rollback(conn)
            raise
        finally:
            self._local.conn = None
            conn.close()

    @staticmethod
    def _rollback(conn) -> None:
        try:
            conn.rollback()
        except mysql.connector.Error:
            logger.warning("Rollback failed; the connection is closed anyway", exc_info=True)


def _storage_error(e: mysql.connector.Error) -> StorageError:
    return StorageError(e.msg if getattr(e, "msg", None) else str(e))
