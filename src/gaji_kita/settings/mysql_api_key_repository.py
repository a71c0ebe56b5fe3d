from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ApiKey
from .repository import ApiKeyRepository


def _to_api_key(r: Dict[str, Any]) -> ApiKey:
    return ApiKey(
        api_key_id=int(r["id"]),
        name=r["name"],
        key=r["key"],
        is_active=bool(r.get("is_active", True)),
        last_used_at=r.get("last_used_at"),
        created_at=r.get("created_at"),
    )


class MySQLApiKeyRepository(ApiKeyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[ApiKey]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, name, `key`, is_active, last_used_at, created_at FROM api_keys ORDER BY created_at DESC, id DESC"
            )
            return [_to_api_key(r) for r in fetchall(cur)]

    def create(self, *, name: str, key: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO api_keys(name, `key`, is_active) VALUES(%s,%s,1)", (name, key))
            return int(cur.lastrowid)

    def get_by_id(self, api_key_id: int) -> Optional[ApiKey]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, name, `key`, is_active, last_used_at, created_at FROM api_keys WHERE id=%s",
                (int(api_key_id),),
            )
            r = fetchone(cur)
            return _to_api_key(r) if r else None

    def get_active_by_key(self, key: str) -> Optional[ApiKey]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, name, `key`, is_active, last_used_at, created_at FROM api_keys WHERE `key`=%s AND is_active=1",
                (key,),
            )
            r = fetchone(cur)
            return _to_api_key(r) if r else None

    def touch(self, api_key_id: int, used_at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE api_keys SET last_used_at=%s WHERE id=%s", (used_at, int(api_key_id)))

    def deactivate(self, api_key_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE api_keys SET is_active=0 WHERE id=%s", (int(api_key_id),))
            return cur.rowcount > 0
