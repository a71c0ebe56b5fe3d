from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..core.enums import BpjsType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import BpjsSetting, TaxSetting
from .repository import BpjsSettingRepository, TaxSettingRepository


def _to_tax(r: Dict[str, Any]) -> TaxSetting:
    return TaxSetting(
        tax_setting_id=int(r["id"]),
        name=r["name"],
        ptkp_amount=to_decimal(r["ptkp_amount"]) or Decimal("0"),
        tax_rate=to_decimal(r["tax_rate"]) or Decimal("0"),
    )


class MySQLTaxSettingRepository(TaxSettingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[TaxSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, ptkp_amount, tax_rate FROM tax_settings ORDER BY ptkp_amount, name")
            return [_to_tax(r) for r in fetchall(cur)]

    def get_by_name(self, name: str) -> Optional[TaxSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, ptkp_amount, tax_rate FROM tax_settings WHERE name=%s", (name,))
            r = fetchone(cur)
            return _to_tax(r) if r else None


class MySQLBpjsSettingRepository(BpjsSettingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[BpjsSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, name, type, employee_percentage, company_percentage FROM bpjs_settings ORDER BY id"
            )
            out = []
            for r in fetchall(cur):
                try:
                    bpjs_type = BpjsType(r["type"])
                except ValueError:
                    continue
                out.append(
                    BpjsSetting(
                        bpjs_setting_id=int(r["id"]),
                        name=r["name"],
                        type=bpjs_type,
                        employee_percentage=to_decimal(r["employee_percentage"]) or Decimal("0"),
                        company_percentage=to_decimal(r["company_percentage"]) or Decimal("0"),
                    )
                )
            return out
