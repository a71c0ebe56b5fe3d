from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from zipfile import BadZipFile
from typing import Any, BinaryIO, Dict, List

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException
from pandas.api.types import is_scalar

from ..core.context import SessionContext
from ..core.exceptions import ValidationError
from .model import ImportStatus
from .reconciler import AttendanceReconciler

logger = logging.getLogger(__name__)


class ImportSchema(str, Enum):
    """Column contract of an uploaded attendance sheet."""

    STANDARD = "standard"
    NIK = "nik"


# sheet header -> reconciler field
COLUMNS = {
    ImportSchema.STANDARD: {"Name": "name", "Date": "date", "Status": "status"},
    ImportSchema.NIK: {
        "NIK": "nik",
        "Nama": "name",
        "Tanggal": "date",
        "Status": "status",
        "Jam Masuk": "check_in",
        "Jam Keluar": "check_out",
        "Catatan": "notes",
    },
}

REQUIRED = {
    ImportSchema.STANDARD: ("Name", "Date", "Status"),
    ImportSchema.NIK: ("NIK", "Tanggal", "Status"),
}

EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


def parse_schema(value: str | None) -> ImportSchema:
    try:
        return ImportSchema((value or ImportSchema.STANDARD.value).strip().lower())
    except ValueError:
        raise ValidationError("Format kolom impor tidak dikenal (gunakan 'standard' atau 'nik')")


def read_table(stream: BinaryIO, filename: str) -> pd.DataFrame:
    suffix = Path(filename or "").suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(stream, dtype=str, keep_default_na=False)
    if suffix in EXCEL_SUFFIXES:
        return pd.read_excel(stream, dtype=object, engine="openpyxl")
    raise ValidationError("File harus berformat CSV atau Excel (.csv, .xlsx)")


def _clean(value: Any) -> Any:
    if value is None:
        return None
    if is_scalar(value) and pd.isna(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, str):
        return value.strip() or None
    return value


def rows_from_frame(frame: pd.DataFrame, schema: ImportSchema) -> List[Dict[str, Any]]:
    frame = frame.rename(columns=lambda c: str(c).strip())
    missing = [c for c in REQUIRED[schema] if c not in frame.columns]
    if missing:
        raise ValidationError(f"Kolom wajib tidak ditemukan: {', '.join(missing)}")

    mapping = {header: field for header, field in COLUMNS[schema].items() if header in frame.columns}
    rows: List[Dict[str, Any]] = []
    for record in frame.to_dict(orient="records"):
        row = {field: _clean(record.get(header)) for header, field in mapping.items()}
        if all(v is None for v in row.values()):
            continue
        if schema == ImportSchema.NIK:
            nik = row.get("nik")
            if nik is not None:
                nik = str(nik)
                row["nik"] = nik
                # Template rows (e.g. "#contoh") are instructions, not data.
                if nik.startswith("#"):
                    continue
        rows.append(row)
    return rows


class AttendanceImporter:
    """Use case: import an uploaded CSV/Excel attendance sheet."""

    def __init__(self, reconciler: AttendanceReconciler):
        self._reconciler = reconciler

    def import_file(
        self,
        ctx: SessionContext,
        stream: BinaryIO,
        filename: str,
        *,
        schema: ImportSchema = ImportSchema.STANDARD,
    ) -> ImportStatus:
        try:
            frame = read_table(stream, filename)
        except (ValueError, UnicodeDecodeError, BadZipFile, InvalidFileException) as e:
            raise ValidationError(f"File tidak dapat dibaca: {e}") from e

        rows = rows_from_frame(frame, schema)
        if not rows:
            raise ValidationError("File tidak berisi data kehadiran")

        logger.info("Importing %d attendance rows from %s (schema=%s)", len(rows), filename, schema.value)
        return self._reconciler.reconcile(ctx, rows)
