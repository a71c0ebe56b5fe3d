from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_date_field
from ..common.http import current_context, json_endpoint, login_required, ok, to_json
from ..container import Container


def payroll_row_json(record) -> dict:
    row = to_json(record)
    components = row.pop("components")
    row.update(components)
    row["deductions"] = str(record.components.deductions)
    return row


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll/process", methods=["POST"], endpoint="payroll_process")
    @login_required
    @json_endpoint
    def payroll_process():
        payload = request.get_json(silent=True) or request.form.to_dict()
        period_start = parse_date_field(payload.get("period_start"), "Tanggal mulai periode")
        period_end = parse_date_field(payload.get("period_end"), "Tanggal akhir periode")
        payment_date = (
            parse_date_field(payload.get("payment_date"), "Tanggal pembayaran") if payload.get("payment_date") else None
        )

        entries = container.payroll_computer.process_period(
            current_context(),
            period_start=period_start,
            period_end=period_end,
            payment_date=payment_date,
            notes=payload.get("notes"),
        )
        return ok(
            {
                "message": f"Penggajian berhasil diproses untuk {len(entries)} karyawan",
                "payroll": [payroll_row_json(p) for p in entries],
            },
            201,
        )

    @app.route("/api/payroll/periods", methods=["GET"], endpoint="payroll_periods")
    @login_required
    @json_endpoint
    def payroll_periods():
        periods = container.payroll_history_service.list_periods(current_context())
        return ok({"periods": to_json(periods)})

    @app.route("/api/payroll/periods/<start>/<end>", methods=["GET"], endpoint="payroll_period_details")
    @login_required
    @json_endpoint
    def payroll_period_details(start: str, end: str):
        records = container.payroll_history_service.period_details(
            current_context(),
            period_start=parse_date_field(start, "Tanggal mulai periode"),
            period_end=parse_date_field(end, "Tanggal akhir periode"),
        )
        return ok({"payroll": [payroll_row_json(r) for r in records]})
