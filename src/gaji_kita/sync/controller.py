from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.http import error_response, ok
from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError


def _bearer_token() -> str | None:
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip() or None
    return None


def register(app: Flask, container: Container) -> None:
    """Endpoint for attendance machines, authenticated by API key instead of session."""

    @app.route("/api/attendance-sync", methods=["POST"], endpoint="attendance_sync")
    def attendance_sync():
        try:
            ctx = container.api_key_service.authenticate(_bearer_token())

            body = request.get_json(silent=True)
            if not isinstance(body, dict):
                raise ValidationError("Body JSON tidak valid")
            action = body.get("action")
            data = body.get("data") or {}
            if not isinstance(data, dict):
                raise ValidationError("Field data harus berupa objek")

            if action == "get_employees":
                employees = container.employee_service.list_employees(ctx)
                return ok(
                    {
                        "employees": [
                            {
                                "id": e.employee_id,
                                "first_name": e.first_name,
                                "last_name": e.last_name,
                                "nik": e.nik,
                            }
                            for e in employees
                        ]
                    }
                )

            if action == "add_employee":
                employee_id, created = container.employee_service.register_from_machine(ctx, data)
                if not created:
                    return ok({"message": "Karyawan sudah terdaftar", "employee_id": employee_id})
                return ok({"message": "Karyawan berhasil ditambahkan", "employee_id": employee_id}, 201)

            if action == "add_attendance":
                return _add_attendance(ctx, data)

            raise ValidationError("Aksi tidak dikenal")
        except Exception as e:
            return error_response(e)

    def _add_attendance(ctx, data: dict):
        if not data.get("employee_id") and not data.get("nik"):
            raise ValidationError("employee_id atau NIK wajib diisi")

        row = {
            "employee_id": data.get("employee_id"),
            "nik": data.get("nik"),
            "date": data.get("date") or date.today().isoformat(),
            "status": data.get("status") or "present",
            "check_in": data.get("check_in"),
            "check_out": data.get("check_out"),
            "notes": data.get("notes"),
        }
        result = container.attendance_reconciler.reconcile(ctx, [row], update_existing=True)
        if result.errors:
            raise ValidationError(result.errors[0])
        if result.mismatches:
            raise NotFoundError(f"{result.mismatches[0].employee_name}: {result.mismatches[0].reason}")

        message = "Data kehadiran diperbarui" if result.updated_count else "Data kehadiran tercatat"
        return ok({"message": message, "attendance_id": result.attendance_ids[0]}, 201)
