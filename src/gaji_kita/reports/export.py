from __future__ import annotations

import csv
import io

import pandas as pd

from ..core.exceptions import ValidationError
from .service import Report

CSV_MIMETYPE = "text/csv"
EXCEL_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def to_csv_bytes(report: Report) -> bytes:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=report.columns)
    writer.writeheader()
    for row in report.rows:
        writer.writerow(row)
    # BOM so Excel opens Indonesian text correctly.
    return out.getvalue().encode("utf-8-sig")


def _sheet_name(title: str) -> str:
    # Excel: max 31 chars, none of []:*?/\
    cleaned = "".join("-" if ch in "[]:*?/\\" else ch for ch in title)
    return cleaned[:31] or "Laporan"


def to_excel_bytes(report: Report) -> bytes:
    df = pd.DataFrame(report.rows, columns=report.columns)
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=_sheet_name(report.title))
    return output.getvalue()


def export_report(report: Report, fmt: str) -> tuple[bytes, str, str]:
    """Return (content, mimetype, filename) for `fmt` in {csv, xlsx}."""
    filename = report.title.lower().replace(" ", "_").replace("/", "-")
    if fmt == "csv":
        return to_csv_bytes(report), CSV_MIMETYPE, f"{filename}.csv"
    if fmt in {"xlsx", "excel"}:
        return to_excel_bytes(report), EXCEL_MIMETYPE, f"{filename}.xlsx"
    raise ValidationError("Format ekspor tidak didukung (gunakan csv atau xlsx)")
