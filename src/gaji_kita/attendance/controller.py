from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.datetime_utils import parse_date_field
from ..common.http import current_context, json_endpoint, login_required, ok, to_json
from ..container import Container
from ..core.exceptions import ValidationError
from .importer import parse_schema


def import_status_json(result) -> dict:
    return {
        "timestamp": result.timestamp.isoformat(),
        "total_rows": result.total_rows,
        "success_count": result.success_count,
        "errors": list(result.errors),
        "mismatches": [{"employee_name": m.employee_name, "reason": m.reason} for m in result.mismatches],
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_daily")
    @login_required
    @json_endpoint
    def attendance_daily():
        raw = request.args.get("date")
        work_date = parse_date_field(raw, "Tanggal") if raw else date.today()
        view = container.attendance_service.daily_view(current_context(), work_date)
        return ok({"attendance": to_json(view)})

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_manual")
    @login_required
    @json_endpoint
    def attendance_manual():
        payload = request.get_json(silent=True) or request.form.to_dict()
        attendance_id = container.attendance_service.record_manual(current_context(), payload)
        return ok({"message": "Data kehadiran berhasil disimpan", "attendance_id": attendance_id}, 201)

    @app.route("/api/attendance/import", methods=["POST"], endpoint="attendance_import")
    @login_required
    @json_endpoint
    def attendance_import():
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            raise ValidationError("Pilih file yang akan diimpor")

        schema = parse_schema(request.form.get("schema"))
        result = container.attendance_importer.import_file(
            current_context(), upload.stream, upload.filename, schema=schema
        )
        return ok({"import_status": import_status_json(result)})
