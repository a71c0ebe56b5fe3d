import io
from datetime import date, datetime

import pandas as pd
import pytest

from gaji_kita.attendance.importer import (
    AttendanceImporter,
    ImportSchema,
    parse_schema,
    read_table,
    rows_from_frame,
)
from gaji_kita.attendance.reconciler import AttendanceReconciler
from gaji_kita.core.enums import AttendanceStatus
from gaji_kita.core.exceptions import ValidationError


def _csv(text: str) -> io.BytesIO:
    return io.BytesIO(text.encode("utf-8"))


def test_standard_csv_rows():
    frame = read_table(
        _csv("Name,Date,Status\nAhmad Surya,2025-04-10,present\n,,\nBudi Santoso,2025-04-10,absent\n"),
        "kehadiran.csv",
    )

    rows = rows_from_frame(frame, ImportSchema.STANDARD)

    assert rows == [
        {"name": "Ahmad Surya", "date": "2025-04-10", "status": "present"},
        {"name": "Budi Santoso", "date": "2025-04-10", "status": "absent"},
    ]


def test_nik_schema_skips_template_rows_and_keeps_punches():
    frame = read_table(
        _csv(
            "NIK,Nama,Tanggal,Status,Jam Masuk,Jam Keluar,Catatan\n"
            "#contoh,Nama Karyawan,2025-01-01,present,08:00,17:00,baris contoh\n"
            "EMP002,Budi Santoso,2025-04-10,present,09:20,17:30,\n"
        ),
        "mesin.csv",
    )

    rows = rows_from_frame(frame, ImportSchema.NIK)

    assert rows == [
        {
            "nik": "EMP002",
            "name": "Budi Santoso",
            "date": "2025-04-10",
            "status": "present",
            "check_in": "09:20",
            "check_out": "17:30",
            "notes": None,
        }
    ]


def test_excel_cells_are_converted_to_python_values():
    frame = pd.DataFrame(
        {
            "Name": ["Ahmad Surya", None],
            "Date": [pd.Timestamp("2025-04-10"), None],
            "Status": ["late", None],
        }
    )

    rows = rows_from_frame(frame, ImportSchema.STANDARD)

    assert rows == [{"name": "Ahmad Surya", "date": datetime(2025, 4, 10), "status": "late"}]


def test_missing_columns_are_reported():
    frame = read_table(_csv("Nama,Tanggal\nAhmad,2025-04-10\n"), "salah.csv")

    with pytest.raises(ValidationError, match="Kolom wajib tidak ditemukan: Name, Date, Status"):
        rows_from_frame(frame, ImportSchema.STANDARD)


def test_unsupported_file_type():
    with pytest.raises(ValidationError, match="CSV atau Excel"):
        read_table(io.BytesIO(b"%PDF-1.4"), "kehadiran.pdf")


def test_parse_schema():
    assert parse_schema(None) == ImportSchema.STANDARD
    assert parse_schema(" NIK ") == ImportSchema.NIK
    with pytest.raises(ValidationError):
        parse_schema("fingerprint")


def test_import_file_runs_the_reconciler(employees_repo, attendance_repo, calendar_repo, admin_ctx):
    importer = AttendanceImporter(AttendanceReconciler(employees_repo, attendance_repo, calendar_repo))

    result = importer.import_file(
        admin_ctx,
        _csv("Name,Date,Status\nAhmad Surya,2025-04-10,present\nSiti Aminah,2025-04-10,present\n"),
        "kehadiran.csv",
    )

    assert result.total_rows == 2
    assert result.success_count == 1
    assert len(result.mismatches) == 1
    (record,) = attendance_repo.records.values()
    assert (record.employee_id, record.work_date, record.status) == (1, date(2025, 4, 10), AttendanceStatus.PRESENT)


def test_empty_file_is_rejected(employees_repo, attendance_repo, calendar_repo, admin_ctx):
    importer = AttendanceImporter(AttendanceReconciler(employees_repo, attendance_repo, calendar_repo))

    with pytest.raises(ValidationError, match="tidak berisi data"):
        importer.import_file(admin_ctx, _csv("Name,Date,Status\n"), "kosong.csv")


def test_broken_excel_file_is_a_validation_error(employees_repo, attendance_repo, calendar_repo, admin_ctx):
    importer = AttendanceImporter(AttendanceReconciler(employees_repo, attendance_repo, calendar_repo))

    with pytest.raises(ValidationError, match="File tidak dapat dibaca"):
        importer.import_file(admin_ctx, io.BytesIO(b"not a zip"), "kehadiran.xlsx")
